# stockfighter/models.py
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Union

from stockfighter.errors import InvalidArgument


class OrderDirection(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderType(str, Enum):
    LIMIT = "limit"
    MARKET = "market"
    FILL_OR_KILL = "fill-or-kill"
    IMMEDIATE_OR_CANCEL = "immediate-or-cancel"


def format_cents(cents: int) -> str:
    """Render integer cents as dollars, e.g. 5264 -> '$52.64'."""
    return f"${cents / 100:.2f}"


def require_identifier(value: Optional[str], name: str) -> str:
    """Strip a venue/stock/account symbol and reject it when blank."""
    if not isinstance(value, str):
        raise InvalidArgument(name, f"expected a string, got {type(value).__name__}")
    value = value.strip()
    if not value:
        raise InvalidArgument(name)
    return value


def _require_amount(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(name, "must be an integer number of cents/shares")
    if value < 0:
        raise InvalidArgument(name, "must not be negative")
    return value


@dataclass(frozen=True)
class StockInfo:
    """A tradable symbol and its display name."""
    symbol: str
    name: str

    def __str__(self) -> str:
        return f"{self.symbol} ({self.name})"


@dataclass(frozen=True)
class StockQuote:
    """Most recent trade and top-of-book for a stock. Prices in cents."""
    bid_price: int = 0
    bid_size: int = 0
    bid_depth: int = 0
    ask_price: int = 0
    ask_size: int = 0
    ask_depth: int = 0
    last_price: int = 0
    last_size: int = 0
    last_trade_time: Optional[datetime] = None
    quote_time: Optional[datetime] = None


@dataclass(frozen=True)
class OrderbookEntry:
    price: int
    quantity: int
    is_buy: bool

    def __str__(self) -> str:
        side = "BUY " if self.is_buy else "SELL"
        return f"{side} {format_cents(self.price)} x {self.quantity}"


@dataclass(frozen=True)
class Orderbook:
    """Orderbook snapshot, entries kept in server order."""
    bids: Tuple[OrderbookEntry, ...] = ()
    asks: Tuple[OrderbookEntry, ...] = ()
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class OrderFillInfo:
    price: int
    quantity: int
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class OrderStatus:
    """State of an open or closed order as reported by the venue."""
    direction: Optional[OrderDirection]
    original_quantity: int
    quantity: int  # Remaining open quantity
    price: int
    order_type: Optional[OrderType]
    order_id: int
    account: str
    timestamp: Optional[datetime] = None
    fills: Tuple[OrderFillInfo, ...] = ()
    total_filled: int = 0
    open: bool = False
    venue: str = ""
    symbol: str = ""


@dataclass(frozen=True)
class OrderRequest:
    """Request to place an order on a venue (inputs).

    Frozen, so the normalised values checked in ``__post_init__`` are the
    ones that get sent.
    """
    venue: str
    stock: str
    account: str
    price: int  # Limit price in cents, ignored by the venue for market orders
    quantity: int
    direction: Union[OrderDirection, str]
    order_type: Union[OrderType, str] = OrderType.LIMIT

    def __post_init__(self):
        _set = object.__setattr__
        _set(self, "venue", require_identifier(self.venue, "venue"))
        _set(self, "stock", require_identifier(self.stock, "stock"))
        _set(self, "account", require_identifier(self.account, "account"))
        _set(self, "price", _require_amount(self.price, "price"))
        _set(self, "quantity", _require_amount(self.quantity, "quantity"))

        try:
            _set(self, "direction", OrderDirection(self.direction))
        except ValueError:
            raise InvalidArgument("direction", f"unknown direction {self.direction!r}") from None

        try:
            _set(self, "order_type", OrderType(self.order_type))
        except ValueError:
            raise InvalidArgument("order_type", f"unknown order type {self.order_type!r}") from None

    def validated(self) -> "OrderRequest":
        """Fresh copy run through the checks again, for requests altered after construction."""
        return replace(self)

    def to_payload(self) -> dict:
        return {
            "account": self.account,
            "venue": self.venue,
            "stock": self.stock,
            "price": self.price,
            "qty": self.quantity,
            "direction": self.direction.value,
            "orderType": self.order_type.value,
        }
