import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from stockfighter.api.async_client import AsyncStockfighterClient
from stockfighter.api.client import StockfighterClient
from stockfighter.protocol import TransportResponse

MOCK_BASE_URL = "http://mock.local/ob/api"
API_KEY = "0123456789abcdef0123456789abcdef01234567"


def make_response(status_code=200, body=None):
    if body is None:
        content = b""
    elif isinstance(body, (bytes, str)):
        content = body.encode() if isinstance(body, str) else body
    else:
        content = json.dumps(body).encode()
    return TransportResponse(status_code=status_code, content=content)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Drop handlers setup_logger() attaches to pytest's captured streams."""
    log = logging.getLogger("stockfighter")
    handlers, level = list(log.handlers), log.level
    yield log
    for handler in list(log.handlers):
        if handler not in handlers:
            log.removeHandler(handler)
    log.setLevel(level)


@pytest.fixture
def transport():
    spy = MagicMock()
    spy.request.return_value = make_response(200, {"ok": True})
    return spy


@pytest.fixture
def respond(transport):
    """Set what the spy transport answers with on the next call."""
    def _respond(status_code=200, body=None):
        transport.request.return_value = make_response(status_code, body)
    return _respond


@pytest.fixture
def client(transport):
    return StockfighterClient(API_KEY, base_url=MOCK_BASE_URL, transport=transport)


@pytest.fixture
def async_transport():
    spy = AsyncMock()
    spy.request.return_value = make_response(200, {"ok": True})
    return spy


@pytest.fixture
def async_respond(async_transport):
    def _respond(status_code=200, body=None):
        async_transport.request.return_value = make_response(status_code, body)
    return _respond


@pytest.fixture
def async_client(async_transport):
    return AsyncStockfighterClient(API_KEY, base_url=MOCK_BASE_URL, transport=async_transport)


@pytest.fixture
def order_body():
    return {
        "ok": True,
        "symbol": "FOOBAR",
        "venue": "TESTEX",
        "direction": "buy",
        "originalQty": 4625,
        "qty": 4625,
        "price": 5264,
        "orderType": "limit",
        "id": 12345,
        "account": "EXB123456",
        "ts": "2015-07-05T22:16:18.226473051Z",
        "fills": [],
        "totalFilled": 0,
        "open": True,
    }


@pytest.fixture
def quote_body():
    return {
        "ok": True,
        "symbol": "FOOBAR",
        "venue": "TESTEX",
        "bid": 5100,
        "ask": 5125,
        "bidSize": 392,
        "askSize": 711,
        "bidDepth": 2748,
        "askDepth": 2237,
        "last": 5125,
        "lastSize": 52,
        "lastTrade": "2015-07-13T05:38:17.33640392Z",
        "quoteTime": "2015-07-13T05:38:17.33640392Z",
    }


@pytest.fixture
def orderbook_body():
    return {
        "ok": True,
        "venue": "TESTEX",
        "symbol": "FOOBAR",
        "bids": [
            {"price": 5200, "qty": 1, "isBuy": True},
            {"price": 815, "qty": 15, "isBuy": True},
        ],
        "asks": [
            {"price": 5205, "qty": 150, "isBuy": False},
            {"price": 5210, "qty": 1500, "isBuy": False},
        ],
        "ts": "2015-12-04T09:02:16.680986205Z",
    }
