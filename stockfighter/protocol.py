from dataclasses import dataclass
from typing import Dict, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP result handed back by a transport"""
    status_code: int
    content: bytes = b""


@runtime_checkable
class Transport(Protocol):
    """Interface for blocking HTTP transports (requests, test spies, etc.)."""

    def request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """Send one request. Raises on connection-level failure."""
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Interface for awaitable HTTP transports (httpx, test spies, etc.)."""

    async def request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """Send one request. Raises on connection-level failure."""
        ...
