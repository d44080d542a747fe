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
from stockfighter.protocol import AsyncTransport
from . import endpoints
from .auth import ApiKeyAuth
from .endpoints import Call
from .transport import DEFAULT_TIMEOUT, HttpxTransport
from .translator import translate


class AsyncStockfighterClient:
    """httpx-backed counterpart of StockfighterClient; every operation is a coroutine."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[AsyncTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.auth = ApiKeyAuth(api_key)
        self.base_url = base_url.rstrip('/')
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(timeout=timeout)

    @classmethod
    def from_config(cls, config: Optional[ConfigManager] = None, transport: Optional[AsyncTransport] = None):
        config = config or ConfigManager()
        return cls(
            api_key=config.get('api_key'),
            base_url=config.get('base_url'),
            transport=transport,
            timeout=config.get('timeout'),
        )

    async def _execute(self, call: Call):
        url = f"{self.base_url}{call.path}"
        headers = self.auth.headers(call.authenticated)
        logger.debug(redact_sensitive(f"{call.method} {url} headers={headers}"))

        try:
            response = await self._transport.request(call.method, url, headers, call.body)
        except StockfighterError:
            raise
        except Exception as e:
            logger.error(f"[{call.operation.name}] transport failure: {e}")
            raise TransportError(f"{call.method} {url} failed: {e}") from e

        logger.debug(f"{call.method} {url} -> {response.status_code}")
        envelope = translate(call.operation, response.status_code, response.content, call.venue, call.stock)
        return call.decode(envelope)

    async def heartbeat(self) -> None:
        await self._execute(endpoints.heartbeat())

    async def venue_heartbeat(self, venue: str) -> None:
        await self._execute(endpoints.venue_heartbeat(venue))

    async def list_stocks(self, venue: str) -> List[StockInfo]:
        return await self._execute(endpoints.list_stocks(venue))

    async def get_orderbook(self, venue: str, stock: str) -> Orderbook:
        return await self._execute(endpoints.get_orderbook(venue, stock))

    async def get_quote(self, venue: str, stock: str) -> StockQuote:
        return await self._execute(endpoints.get_quote(venue, stock))

    async def place_order(
        self,
        venue: str,
        stock: str,
        account: str,
        price: int,
        quantity: int,
        direction: Union[OrderDirection, str],
        order_type: Union[OrderType, str] = OrderType.LIMIT,
    ) -> OrderStatus:
        order = OrderRequest(
            venue=venue,
            stock=stock,
            account=account,
            price=price,
            quantity=quantity,
            direction=direction,
            order_type=order_type,
        )
        return await self.submit_order(order)

    async def submit_order(self, order: OrderRequest) -> OrderStatus:
        order = order.validated()
        call = endpoints.place_order(order)
        logger.info(
            f"Placing {order.order_type.value} {order.direction.value} "
            f"{order.quantity} {order.stock}@{order.price} on {order.venue}"
        )
        return await self._execute(call)

    async def get_order(self, venue: str, stock: str, order_id: int) -> OrderStatus:
        return await self._execute(endpoints.get_order(venue, stock, order_id))

    async def cancel_order(self, venue: str, stock: str, order_id: int) -> OrderStatus:
        return await self._execute(endpoints.cancel_order(venue, stock, order_id))

    async def get_all_orders(self, venue: str, account: str) -> List[OrderStatus]:
        return await self._execute(endpoints.get_all_orders(venue, account))

    async def get_stock_orders(self, venue: str, account: str, stock: str) -> List[OrderStatus]:
        return await self._execute(endpoints.get_stock_orders(venue, account, stock))

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
