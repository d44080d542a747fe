"""
JSON envelope shapes returned by the Stockfighter API.

Every response carries ``ok`` and, on failure, ``error``. Missing payload
fields decode to zero values, the same way the server omits them for empty
books or fresh orders.
"""
import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, StrictBool, field_validator

from stockfighter.models import OrderDirection, OrderType

# The venue reports nanoseconds, datetime holds microseconds
_FRACTION = re.compile(r"(\.\d{6})\d+")


def _trim_timestamp(value):
    if isinstance(value, str):
        if not value:
            return None
        return _FRACTION.sub(r"\1", value)
    return value


def _none_as_empty(value):
    return [] if value is None else value


def _blank_as_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Envelope(Payload):
    ok: StrictBool
    error: Optional[str] = None


class HeartbeatEnvelope(Envelope):
    venue: str = ""


class StockPayload(Payload):
    symbol: str
    name: str = ""


class StocksEnvelope(Envelope):
    symbols: List[StockPayload] = Field(default_factory=list)

    empty_lists = field_validator("symbols", mode="before")(_none_as_empty)


class BookEntryPayload(Payload):
    price: NonNegativeInt = 0
    qty: NonNegativeInt = 0
    is_buy: bool = Field(False, alias="isBuy")


class OrderbookEnvelope(Envelope):
    venue: str = ""
    symbol: str = ""
    bids: List[BookEntryPayload] = Field(default_factory=list)
    asks: List[BookEntryPayload] = Field(default_factory=list)
    ts: Optional[datetime] = None

    empty_lists = field_validator("bids", "asks", mode="before")(_none_as_empty)
    timestamps = field_validator("ts", mode="before")(_trim_timestamp)


class QuoteEnvelope(Envelope):
    venue: str = ""
    symbol: str = ""
    bid: NonNegativeInt = 0
    bid_size: NonNegativeInt = Field(0, alias="bidSize")
    bid_depth: NonNegativeInt = Field(0, alias="bidDepth")
    ask: NonNegativeInt = 0
    ask_size: NonNegativeInt = Field(0, alias="askSize")
    ask_depth: NonNegativeInt = Field(0, alias="askDepth")
    last: NonNegativeInt = 0
    last_size: NonNegativeInt = Field(0, alias="lastSize")
    last_trade: Optional[datetime] = Field(None, alias="lastTrade")
    quote_time: Optional[datetime] = Field(None, alias="quoteTime")

    timestamps = field_validator("last_trade", "quote_time", mode="before")(_trim_timestamp)


class FillPayload(Payload):
    price: NonNegativeInt = 0
    qty: NonNegativeInt = 0
    ts: Optional[datetime] = None

    timestamps = field_validator("ts", mode="before")(_trim_timestamp)


class OrderPayload(Payload):
    venue: str = ""
    symbol: str = ""
    direction: Optional[OrderDirection] = None
    original_qty: NonNegativeInt = Field(0, alias="originalQty")
    qty: NonNegativeInt = 0
    price: NonNegativeInt = 0
    order_type: Optional[OrderType] = Field(None, alias="orderType")
    id: int = 0
    account: str = ""
    ts: Optional[datetime] = None
    fills: List[FillPayload] = Field(default_factory=list)
    total_filled: NonNegativeInt = Field(0, alias="totalFilled")
    open: bool = False

    empty_lists = field_validator("fills", mode="before")(_none_as_empty)
    timestamps = field_validator("ts", mode="before")(_trim_timestamp)
    tags = field_validator("direction", "order_type", mode="before")(_blank_as_none)


class OrderEnvelope(Envelope, OrderPayload):
    pass


class OrdersEnvelope(Envelope):
    venue: str = ""
    orders: List[OrderPayload] = Field(default_factory=list)

    empty_lists = field_validator("orders", mode="before")(_none_as_empty)
