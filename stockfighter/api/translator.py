"""
Response translation for the Stockfighter API.

Every call goes through :func:`translate`, which turns an HTTP status code and
a raw body into either the decoded envelope or one typed error. Sentinel
status codes are checked before the body is touched: 401, 404 and the venue
heartbeat's 500 come back with bodies that are empty, not JSON, or not shaped
like the success envelope.
"""
import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Type

from pydantic import ValidationError

from stockfighter.errors import (
    APIError,
    APITimeout,
    DecodeError,
    StockfighterError,
    StockNotFound,
    Unauthorized,
    VenueNotFound,
)
from stockfighter.logger import logger
from .responses import Envelope

HTTP_UNAUTHORIZED = 401
HTTP_NOT_FOUND = 404
HTTP_SERVER_ERROR = 500


class NotFoundScope(str, Enum):
    """Which symbol a 404 refers to for a given operation."""
    NONE = "none"
    VENUE = "venue"
    STOCK = "stock"


@dataclass(frozen=True)
class Operation:
    """One row of the sentinel table: how an endpoint's status codes are read."""
    name: str
    envelope: Type[Envelope] = Envelope
    unauthorized: bool = False
    not_found: NotFoundScope = NotFoundScope.NONE
    timeout_on_500: bool = False


def classify_status(
    operation: Operation,
    status_code: int,
    venue: Optional[str] = None,
    stock: Optional[str] = None,
) -> Optional[StockfighterError]:
    """Return the error a sentinel status code maps to, or None to keep going."""
    if status_code == HTTP_UNAUTHORIZED and operation.unauthorized:
        return Unauthorized()

    if status_code == HTTP_NOT_FOUND:
        if operation.not_found is NotFoundScope.VENUE:
            return VenueNotFound(venue)
        if operation.not_found is NotFoundScope.STOCK:
            return StockNotFound(venue, stock)

    if status_code == HTTP_SERVER_ERROR and operation.timeout_on_500:
        return APITimeout(venue)

    return None


def decode_envelope(operation: Operation, content: bytes) -> Envelope:
    """Parse a body into the operation's envelope, raising APIError on ok=false."""
    try:
        data = json.loads(content)
    except ValueError as e:
        raise DecodeError(f"{operation.name}: response is not valid JSON") from e

    try:
        head = Envelope.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"{operation.name}: response is not an API envelope") from e

    if not head.ok:
        raise APIError(head.error or "")

    try:
        return operation.envelope.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"{operation.name}: unexpected response shape") from e


def translate(
    operation: Operation,
    status_code: int,
    content: bytes,
    venue: Optional[str] = None,
    stock: Optional[str] = None,
) -> Envelope:
    """Map one HTTP response onto a decoded envelope or a typed error."""
    error = classify_status(operation, status_code, venue, stock)
    if error is not None:
        logger.warning(f"[{operation.name}] HTTP {status_code}: {error}")
        raise error

    try:
        return decode_envelope(operation, content)
    except StockfighterError as e:
        logger.warning(f"[{operation.name}] HTTP {status_code}: {e}")
        raise
