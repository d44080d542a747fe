import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from stockfighter.api import endpoints
from stockfighter.api.responses import OrderbookEnvelope, OrderEnvelope, QuoteEnvelope
from stockfighter.api.translator import classify_status, decode_envelope, translate
from stockfighter.errors import (
    APIError,
    APITimeout,
    DecodeError,
    StockNotFound,
    Unauthorized,
    VenueNotFound,
)


def _body(payload) -> bytes:
    return json.dumps(payload).encode()


AUTHENTICATED = [op for op in endpoints.OPERATIONS if op.unauthorized]


def test_sentinel_table_rows():
    assert not endpoints.HEARTBEAT.unauthorized
    assert not endpoints.VENUE_HEARTBEAT.unauthorized
    assert endpoints.VENUE_HEARTBEAT.timeout_on_500
    assert [op.name for op in endpoints.OPERATIONS if op.timeout_on_500] == ["venue_heartbeat"]
    assert {op.name for op in AUTHENTICATED} == {
        "list_stocks", "get_orderbook", "place_order", "get_quote", "get_order",
        "cancel_order", "get_all_orders", "get_stock_orders",
    }


@pytest.mark.parametrize("operation", AUTHENTICATED, ids=lambda op: op.name)
@pytest.mark.parametrize("content", [b"", b"<html>nope</html>", _body({"ok": True})])
def test_401_is_unauthorized_regardless_of_body(operation, content):
    with pytest.raises(Unauthorized):
        translate(operation, 401, content, "TESTEX", "FOOBAR")


@pytest.mark.parametrize("operation", [endpoints.VENUE_HEARTBEAT, endpoints.LIST_STOCKS], ids=lambda op: op.name)
def test_404_on_venue_scoped_operation(operation):
    with pytest.raises(VenueNotFound) as exc:
        translate(operation, 404, b"", "NOEXIST")
    assert exc.value.venue == "NOEXIST"


@pytest.mark.parametrize(
    "operation",
    [endpoints.GET_ORDERBOOK, endpoints.PLACE_ORDER, endpoints.GET_QUOTE, endpoints.CANCEL_ORDER],
    ids=lambda op: op.name,
)
def test_404_on_stock_scoped_operation(operation):
    # An ok-shaped body must not be decoded once the status says not found
    with pytest.raises(StockNotFound) as exc:
        translate(operation, 404, _body({"ok": True}), "TESTEX", "NOEXIST")
    assert exc.value.venue == "TESTEX"
    assert exc.value.stock == "NOEXIST"


def test_500_on_venue_heartbeat_is_timeout():
    with pytest.raises(APITimeout):
        translate(endpoints.VENUE_HEARTBEAT, 500, b"", "TESTEX")


def test_500_elsewhere_falls_through_to_envelope():
    body = _body({"ok": False, "error": "No venue exists with the symbol NOEXIST"})
    with pytest.raises(APIError) as exc:
        translate(endpoints.GET_ORDERBOOK, 500, body, "NOEXIST", "FOOBAR")
    assert exc.value.message == "No venue exists with the symbol NOEXIST"


def test_unclassified_codes_return_none():
    assert classify_status(endpoints.HEARTBEAT, 401) is None
    assert classify_status(endpoints.HEARTBEAT, 404) is None
    assert classify_status(endpoints.VENUE_HEARTBEAT, 401, "TESTEX") is None
    assert classify_status(endpoints.GET_QUOTE, 500, "TESTEX", "FOOBAR") is None
    assert classify_status(endpoints.GET_QUOTE, 200, "TESTEX", "FOOBAR") is None


@pytest.mark.parametrize("operation", [endpoints.GET_ORDER, endpoints.GET_ALL_ORDERS, endpoints.GET_STOCK_ORDERS],
                         ids=lambda op: op.name)
def test_404_on_order_lookups_stays_unclassified(operation):
    with pytest.raises(APIError) as exc:
        translate(operation, 404, _body({"ok": False, "error": "not found"}), "TESTEX", "FOOBAR")
    assert exc.value.message == "not found"

    with pytest.raises(DecodeError):
        translate(operation, 404, b"404 page not found", "TESTEX", "FOOBAR")


def test_invalid_json_is_decode_error():
    with pytest.raises(DecodeError) as exc:
        decode_envelope(endpoints.GET_QUOTE, b"{not json")
    assert isinstance(exc.value.__cause__, ValueError)


def test_missing_ok_field_is_decode_error():
    with pytest.raises(DecodeError) as exc:
        decode_envelope(endpoints.GET_QUOTE, _body({"error": "boom"}))
    assert isinstance(exc.value.__cause__, ValidationError)


@pytest.mark.parametrize("ok", ["false", "no", "true", 0, 1])
def test_non_boolean_ok_is_decode_error(ok):
    with pytest.raises(DecodeError) as exc:
        translate(endpoints.GET_QUOTE, 200, _body({"ok": ok, "error": "x"}), "TESTEX", "FOOBAR")
    assert isinstance(exc.value.__cause__, ValidationError)


def test_non_object_body_is_decode_error():
    with pytest.raises(DecodeError):
        decode_envelope(endpoints.LIST_STOCKS, _body([1, 2, 3]))


def test_wrong_payload_shape_is_decode_error():
    with pytest.raises(DecodeError):
        decode_envelope(endpoints.GET_ORDERBOOK, _body({"ok": True, "bids": "lots"}))
    with pytest.raises(DecodeError):
        decode_envelope(endpoints.GET_QUOTE, _body({"ok": True, "bid": -5}))
    with pytest.raises(DecodeError):
        decode_envelope(endpoints.PLACE_ORDER, _body({"ok": True, "direction": "sideways"}))


def test_ok_false_is_api_error_even_with_garbage_payload():
    body = _body({"ok": False, "error": "boom", "bids": "not a list"})
    with pytest.raises(APIError) as exc:
        decode_envelope(endpoints.GET_ORDERBOOK, body)
    assert exc.value.message == "boom"
    assert str(exc.value) == "boom"


def test_ok_false_without_message():
    with pytest.raises(APIError) as exc:
        decode_envelope(endpoints.HEARTBEAT, _body({"ok": False}))
    assert exc.value.message == ""


def test_success_returns_operation_envelope(orderbook_body, quote_body, order_body):
    book = translate(endpoints.GET_ORDERBOOK, 200, _body(orderbook_body), "TESTEX", "FOOBAR")
    assert isinstance(book, OrderbookEnvelope)
    assert [b.price for b in book.bids] == [5200, 815]

    quote = translate(endpoints.GET_QUOTE, 200, _body(quote_body), "TESTEX", "FOOBAR")
    assert isinstance(quote, QuoteEnvelope)
    assert quote.bid_size == 392

    order = translate(endpoints.PLACE_ORDER, 200, _body(order_body), "TESTEX", "FOOBAR")
    assert isinstance(order, OrderEnvelope)
    assert order.id == 12345


def test_nanosecond_timestamps_are_truncated(quote_body):
    quote = decode_envelope(endpoints.GET_QUOTE, _body(quote_body))
    assert quote.last_trade == datetime(2015, 7, 13, 5, 38, 17, 336403, tzinfo=timezone.utc)
    assert quote.quote_time.tzinfo is not None


def test_missing_fields_decode_to_zero_values():
    quote = decode_envelope(endpoints.GET_QUOTE, _body({"ok": True, "venue": "TESTEX", "symbol": "FOOBAR"}))
    assert quote.bid == 0
    assert quote.ask_depth == 0
    assert quote.last_trade is None

    book = decode_envelope(endpoints.GET_ORDERBOOK, _body({"ok": True, "bids": None, "asks": None}))
    assert book.bids == []
    assert book.asks == []
