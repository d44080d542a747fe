"""
Endpoint catalogue for the Stockfighter order book API.

Each builder validates its arguments, then returns a :class:`Call` that both
the blocking and the async client can send. Nothing here does I/O.
"""
import json
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from stockfighter.errors import InvalidArgument
from stockfighter.models import (
    OrderbookEntry,
    Orderbook,
    OrderFillInfo,
    OrderRequest,
    OrderStatus,
    StockInfo,
    StockQuote,
    require_identifier,
)
from .responses import (
    HeartbeatEnvelope,
    OrderbookEnvelope,
    OrderEnvelope,
    OrderPayload,
    OrdersEnvelope,
    QuoteEnvelope,
    StocksEnvelope,
)
from .translator import NotFoundScope, Operation

# Sentinel table: which status codes are classified before the body is read
HEARTBEAT = Operation("heartbeat", HeartbeatEnvelope)
VENUE_HEARTBEAT = Operation(
    "venue_heartbeat", HeartbeatEnvelope,
    not_found=NotFoundScope.VENUE, timeout_on_500=True,
)
LIST_STOCKS = Operation("list_stocks", StocksEnvelope, unauthorized=True, not_found=NotFoundScope.VENUE)
GET_ORDERBOOK = Operation("get_orderbook", OrderbookEnvelope, unauthorized=True, not_found=NotFoundScope.STOCK)
PLACE_ORDER = Operation("place_order", OrderEnvelope, unauthorized=True, not_found=NotFoundScope.STOCK)
GET_QUOTE = Operation("get_quote", QuoteEnvelope, unauthorized=True, not_found=NotFoundScope.STOCK)
GET_ORDER = Operation("get_order", OrderEnvelope, unauthorized=True)
CANCEL_ORDER = Operation("cancel_order", OrderEnvelope, unauthorized=True, not_found=NotFoundScope.STOCK)
GET_ALL_ORDERS = Operation("get_all_orders", OrdersEnvelope, unauthorized=True)
GET_STOCK_ORDERS = Operation("get_stock_orders", OrdersEnvelope, unauthorized=True)

OPERATIONS = (
    HEARTBEAT,
    VENUE_HEARTBEAT,
    LIST_STOCKS,
    GET_ORDERBOOK,
    PLACE_ORDER,
    GET_QUOTE,
    GET_ORDER,
    CANCEL_ORDER,
    GET_ALL_ORDERS,
    GET_STOCK_ORDERS,
)


@dataclass(frozen=True)
class Call:
    """A fully validated request plus the mapping for its success payload."""
    operation: Operation
    method: str
    path: str
    decode: Callable[[Any], Any]
    venue: Optional[str] = None
    stock: Optional[str] = None
    body: Optional[bytes] = None
    authenticated: bool = True


# --- Envelope -> domain mapping ---

def _nothing(envelope) -> None:
    return None


def to_stocks(envelope: StocksEnvelope) -> List[StockInfo]:
    return [StockInfo(symbol=s.symbol, name=s.name) for s in envelope.symbols]


def to_orderbook(envelope: OrderbookEnvelope) -> Orderbook:
    return Orderbook(
        bids=tuple(OrderbookEntry(price=e.price, quantity=e.qty, is_buy=e.is_buy) for e in envelope.bids),
        asks=tuple(OrderbookEntry(price=e.price, quantity=e.qty, is_buy=e.is_buy) for e in envelope.asks),
        timestamp=envelope.ts,
    )


def to_quote(envelope: QuoteEnvelope) -> StockQuote:
    return StockQuote(
        bid_price=envelope.bid,
        bid_size=envelope.bid_size,
        bid_depth=envelope.bid_depth,
        ask_price=envelope.ask,
        ask_size=envelope.ask_size,
        ask_depth=envelope.ask_depth,
        last_price=envelope.last,
        last_size=envelope.last_size,
        last_trade_time=envelope.last_trade,
        quote_time=envelope.quote_time,
    )


def to_order_status(payload: OrderPayload) -> OrderStatus:
    return OrderStatus(
        direction=payload.direction,
        original_quantity=payload.original_qty,
        quantity=payload.qty,
        price=payload.price,
        order_type=payload.order_type,
        order_id=payload.id,
        account=payload.account,
        timestamp=payload.ts,
        fills=tuple(OrderFillInfo(price=f.price, quantity=f.qty, timestamp=f.ts) for f in payload.fills),
        total_filled=payload.total_filled,
        open=payload.open,
        venue=payload.venue,
        symbol=payload.symbol,
    )


def to_order_statuses(envelope: OrdersEnvelope) -> List[OrderStatus]:
    return [to_order_status(order) for order in envelope.orders]


def _require_order_id(order_id: int) -> int:
    if isinstance(order_id, bool) or not isinstance(order_id, int):
        raise InvalidArgument("order_id", "must be an integer")
    return order_id


# --- Builders ---

def heartbeat() -> Call:
    return Call(HEARTBEAT, "GET", "/heartbeat", _nothing, authenticated=False)


def venue_heartbeat(venue: str) -> Call:
    venue = require_identifier(venue, "venue")
    return Call(VENUE_HEARTBEAT, "GET", f"/venues/{venue}/heartbeat", _nothing, venue=venue)


def list_stocks(venue: str) -> Call:
    venue = require_identifier(venue, "venue")
    return Call(LIST_STOCKS, "GET", f"/venues/{venue}/stocks", to_stocks, venue=venue)


def get_orderbook(venue: str, stock: str) -> Call:
    venue = require_identifier(venue, "venue")
    stock = require_identifier(stock, "stock")
    return Call(GET_ORDERBOOK, "GET", f"/venues/{venue}/stocks/{stock}", to_orderbook, venue=venue, stock=stock)


def place_order(order: OrderRequest) -> Call:
    """Build the POST for an order request, checking it again first."""
    order = order.validated()
    return Call(
        PLACE_ORDER,
        "POST",
        f"/venues/{order.venue}/stocks/{order.stock}/orders",
        to_order_status,
        venue=order.venue,
        stock=order.stock,
        body=json.dumps(order.to_payload()).encode("utf-8"),
    )


def get_quote(venue: str, stock: str) -> Call:
    venue = require_identifier(venue, "venue")
    stock = require_identifier(stock, "stock")
    return Call(GET_QUOTE, "GET", f"/venues/{venue}/stocks/{stock}/quote", to_quote, venue=venue, stock=stock)


def get_order(venue: str, stock: str, order_id: int) -> Call:
    venue = require_identifier(venue, "venue")
    stock = require_identifier(stock, "stock")
    order_id = _require_order_id(order_id)
    return Call(
        GET_ORDER, "GET", f"/venues/{venue}/stocks/{stock}/orders/{order_id}",
        to_order_status, venue=venue, stock=stock,
    )


def cancel_order(venue: str, stock: str, order_id: int) -> Call:
    venue = require_identifier(venue, "venue")
    stock = require_identifier(stock, "stock")
    order_id = _require_order_id(order_id)
    return Call(
        CANCEL_ORDER, "DELETE", f"/venues/{venue}/stocks/{stock}/orders/{order_id}",
        to_order_status, venue=venue, stock=stock,
    )


def get_all_orders(venue: str, account: str) -> Call:
    venue = require_identifier(venue, "venue")
    account = require_identifier(account, "account")
    return Call(
        GET_ALL_ORDERS, "GET", f"/venues/{venue}/accounts/{account}/orders",
        to_order_statuses, venue=venue,
    )


def get_stock_orders(venue: str, account: str, stock: str) -> Call:
    venue = require_identifier(venue, "venue")
    account = require_identifier(account, "account")
    stock = require_identifier(stock, "stock")
    return Call(
        GET_STOCK_ORDERS, "GET", f"/venues/{venue}/accounts/{account}/stocks/{stock}/orders",
        to_order_statuses, venue=venue, stock=stock,
    )
