from typing import List, Optional, Union

from stockfighter.config.constants import DEFAULT_BASE_URL
from stockfighter.config.manager import ConfigManager
from stockfighter.errors import StockfighterError, TransportError
from stockfighter.logger import logger, redact_sensitive
from stockfighter.models import (
    Orderbook,
    OrderDirection,
    OrderRequest,
    OrderStatus,
    OrderType,
    StockInfo,
    StockQuote,
)
from stockfighter.protocol import Transport
from . import endpoints
from .auth import ApiKeyAuth
from .endpoints import Call
from .transport import DEFAULT_TIMEOUT, RequestsTransport
from .translator import translate


class StockfighterClient:
    """
    Blocking client for the Stockfighter order book API.

    The client keeps no per-call state, so one instance can be shared across
    threads. Pass ``transport`` to route requests through something other than
    a requests.Session (a test spy, a proxy-aware session, ...).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[Transport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.auth = ApiKeyAuth(api_key)
        self.base_url = base_url.rstrip('/')
        self._owns_transport = transport is None
        self._transport = transport or RequestsTransport(self.auth.create_session(), timeout=timeout)

    @classmethod
    def from_config(cls, config: Optional[ConfigManager] = None, transport: Optional[Transport] = None):
        """Build a client from STOCKFIGHTER_* environment settings."""
        config = config or ConfigManager()
        return cls(
            api_key=config.get('api_key'),
            base_url=config.get('base_url'),
            transport=transport,
            timeout=config.get('timeout'),
        )

    def _execute(self, call: Call):
        url = f"{self.base_url}{call.path}"
        headers = self.auth.headers(call.authenticated)
        logger.debug(redact_sensitive(f"{call.method} {url} headers={headers}"))

        try:
            response = self._transport.request(call.method, url, headers, call.body)
        except StockfighterError:
            raise
        except Exception as e:
            logger.error(f"[{call.operation.name}] transport failure: {e}")
            raise TransportError(f"{call.method} {url} failed: {e}") from e

        logger.debug(f"{call.method} {url} -> {response.status_code}")
        envelope = translate(call.operation, response.status_code, response.content, call.venue, call.stock)
        return call.decode(envelope)

    # --- Health ---

    def heartbeat(self) -> None:
        """Check that the API is up. Raises on any failure."""
        self._execute(endpoints.heartbeat())

    def venue_heartbeat(self, venue: str) -> None:
        """Check that a venue is up. Raises VenueNotFound or APITimeout."""
        self._execute(endpoints.venue_heartbeat(venue))

    # --- Market data ---

    def list_stocks(self, venue: str) -> List[StockInfo]:
        """Stocks available for trading on a venue."""
        return self._execute(endpoints.list_stocks(venue))

    def get_orderbook(self, venue: str, stock: str) -> Orderbook:
        return self._execute(endpoints.get_orderbook(venue, stock))

    def get_quote(self, venue: str, stock: str) -> StockQuote:
        """Most recent trade information for a stock."""
        return self._execute(endpoints.get_quote(venue, stock))

    # --- Orders ---

    def place_order(
        self,
        venue: str,
        stock: str,
        account: str,
        price: int,
        quantity: int,
        direction: Union[OrderDirection, str],
        order_type: Union[OrderType, str] = OrderType.LIMIT,
    ) -> OrderStatus:
        """Place an order; price is in cents."""
        order = OrderRequest(
            venue=venue,
            stock=stock,
            account=account,
            price=price,
            quantity=quantity,
            direction=direction,
            order_type=order_type,
        )
        return self.submit_order(order)

    def submit_order(self, order: OrderRequest) -> OrderStatus:
        """Place an order from a prepared OrderRequest."""
        order = order.validated()
        call = endpoints.place_order(order)
        logger.info(
            f"Placing {order.order_type.value} {order.direction.value} "
            f"{order.quantity} {order.stock}@{order.price} on {order.venue}"
        )
        return self._execute(call)

    def get_order(self, venue: str, stock: str, order_id: int) -> OrderStatus:
        return self._execute(endpoints.get_order(venue, stock, order_id))

    def cancel_order(self, venue: str, stock: str, order_id: int) -> OrderStatus:
        """Cancel an order and return its final status."""
        return self._execute(endpoints.cancel_order(venue, stock, order_id))

    def get_all_orders(self, venue: str, account: str) -> List[OrderStatus]:
        """Every order the account has placed on the venue."""
        return self._execute(endpoints.get_all_orders(venue, account))

    def get_stock_orders(self, venue: str, account: str, stock: str) -> List[OrderStatus]:
        """Every order the account has placed for one stock on the venue."""
        return self._execute(endpoints.get_stock_orders(venue, account, stock))

    # --- Lifecycle ---

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
