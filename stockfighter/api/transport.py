"""HTTP transports: requests for the blocking client, httpx for the async one."""
from typing import Dict, Optional

import httpx
import requests

from stockfighter.errors import TransportError
from stockfighter.logger import logger
from stockfighter.protocol import TransportResponse

DEFAULT_TIMEOUT = 10.0


class RequestsTransport:
    def __init__(self, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self._session = session or requests.Session()
        self.timeout = timeout

    def request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                data=body,
                timeout=self.timeout
            )
            # Reading the body can still fail mid-stream
            return TransportResponse(status_code=response.status_code, content=response.content)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e

    def close(self) -> None:
        self._session.close()


class HttpxTransport:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = DEFAULT_TIMEOUT):
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={'User-Agent': 'stockfighter-client/1.0'},
        )

    async def request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        try:
            response = await self._client.request(method, url, headers=headers, content=body)
            return TransportResponse(status_code=response.status_code, content=response.content)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e

    async def aclose(self) -> None:
        await self._client.aclose()
