from typing import Annotated, Optional

from pydantic import BaseModel, Field, StrictInt, StrictStr

NO_DATA_MESSAGE = "no data found"

# range of the INT column backing stocks.amount
AMOUNT_MIN = -(2**31)
AMOUNT_MAX = 2**31 - 1

Amount = Annotated[StrictInt, Field(ge=AMOUNT_MIN, le=AMOUNT_MAX)]


class StockBase(BaseModel):
    name: str
    amount: int


class StockOut(StockBase):

    class Config:
        from_attributes = True


class StockIn(BaseModel):
    # empty name is rejected by the handler, not by the schema
    name: StrictStr = ""
    amount: Optional[Amount] = None


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str
