from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from inventory_api.core.config import settings
from inventory_api.core.logging_utils import configure_logging, get_logger
from inventory_api.db.init_db import init_db
from inventory_api.db.sessions import build_engine, wait_for_database
from inventory_api.stock import stocks
from inventory_api.stock.stock_access import StockStore

configure_logging()
logger = get_logger(__name__)


def open_store() -> StockStore:
    """Connect to the configured database and make sure the tables exist."""
    engine = build_engine(settings.sqlalchemy_url)
    wait_for_database(
        engine,
        retries=settings.db_connect_retries,
        delay=settings.db_connect_retry_delay,
    )
    init_db(engine)
    return StockStore(engine)


async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(store: Optional[StockStore] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = store if store is not None else open_store()
        yield
        app.state.store.close()

    app = FastAPI(title="Inventory API", version="1.0.0", lifespan=lifespan)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.add_exception_handler(RequestValidationError, invalid_body_handler)
    app.include_router(stocks.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting local server on {settings.app_host}:{settings.app_port}")
    uvicorn.run(app, host=settings.app_host, port=settings.app_port)
