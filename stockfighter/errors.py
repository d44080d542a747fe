from typing import Optional


class StockfighterError(Exception):
    """Base class for every error raised by the client."""


class TransportError(StockfighterError):
    """The request never produced a usable HTTP response."""


class DecodeError(StockfighterError):
    """The response body did not match the expected JSON envelope."""


class Unauthorized(StockfighterError):
    """API key rejected (HTTP 401)."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)


class VenueNotFound(StockfighterError):
    """Venue symbol unknown to the server (HTTP 404)."""

    def __init__(self, venue: str):
        self.venue = venue
        super().__init__(f"Venue not found: {venue}")


class StockNotFound(StockfighterError):
    """Stock symbol unknown in the venue (HTTP 404)."""

    def __init__(self, venue: str, stock: str):
        self.venue = venue
        self.stock = stock
        super().__init__(f"Stock not found: {stock} (venue: {venue})")


class APITimeout(StockfighterError):
    """The venue process did not answer in time (HTTP 500 on venue heartbeat)."""

    def __init__(self, venue: Optional[str] = None):
        self.venue = venue
        super().__init__(f"API time out (venue: {venue})" if venue else "API time out")


class APIError(StockfighterError):
    """The server answered with ``ok: false``."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidArgument(StockfighterError, ValueError):
    """A required argument was rejected before any request was sent."""

    def __init__(self, field: str, reason: str = "must not be blank"):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")
