# inventory_api/stock/stocks.py

from typing import List, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from inventory_api.core.logging_utils import get_logger
from .stock_access import StockStore, StoreError
from .stock_validator import (
    NO_DATA_MESSAGE,
    ErrorOut,
    MessageOut,
    StockIn,
    StockOut,
)

DEFAULT_AMOUNT = 1

router = APIRouter(prefix="/v1/stocks", tags=["stocks"])
logger = get_logger(__name__)

READ_ERROR_RESPONSES = {
    500: {"model": ErrorOut},
}

WRITE_ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    500: {"model": ErrorOut},
}



def get_store(request: Request) -> StockStore:
    return request.app.state.store


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def no_data_response() -> JSONResponse:
    return JSONResponse(status_code=200, content={"message": NO_DATA_MESSAGE})


@router.get(
    "",
    response_model=Union[List[StockOut], MessageOut],
    responses=READ_ERROR_RESPONSES,
)
def list_stocks(store: StockStore = Depends(get_store)):
    logger.info("Listing all stocks")
    try:
        stocks = store.list_all()
    except StoreError as e:
        return error_response(500, str(e))

    if not stocks:
        return no_data_response()
    return [StockOut.model_validate(s) for s in stocks]


@router.get(
    "/{name}",
    response_model=Union[StockOut, MessageOut],
    responses=READ_ERROR_RESPONSES,
)
def get_stock(name: str, store: StockStore = Depends(get_store)):
    logger.info(f"Fetching stock name={name}")
    try:
        stock = store.find_by_name(name)
    except StoreError as e:
        return error_response(500, str(e))

    # a missing item is answered like an empty result: 200 with the sentinel
    if stock is None:
        return no_data_response()
    return StockOut.model_validate(stock)


@router.post(
    "",
    response_model=StockOut,
    responses=WRITE_ERROR_RESPONSES,
)
def create_or_add_stock(payload: StockIn, store: StockStore = Depends(get_store)):
    """
    Create a stock, or add to the amount of an existing one.

    A missing or zero `amount` counts as 1. The response is read back after
    the write, so it carries the cumulative amount.
    """
    if not payload.name:
        return error_response(400, "Name is required")

    amount = payload.amount or DEFAULT_AMOUNT
    logger.info(f"Adding stock name={payload.name}, amount={amount}")

    try:
        store.upsert(payload.name, amount)
        stock = store.find_by_name(payload.name)
    except StoreError as e:
        return error_response(500, str(e))

    if stock is None:
        return error_response(500, f"stock {payload.name} not found after upsert")
    return StockOut.model_validate(stock)
