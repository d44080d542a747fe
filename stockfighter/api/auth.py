from typing import Dict

import requests

from stockfighter.logger import logger

AUTH_HEADER = "X-Starfighter-Authorization"


class ApiKeyAuth:
    """Holds the API key and builds the headers every request carries."""

    def __init__(self, api_key: str):
        self.api_key = (api_key or "").strip()
        if not self.api_key:
            logger.warning("No API key configured; authenticated endpoints will answer 401")
        else:
            masked = f"{self.api_key[:4]}..." if len(self.api_key) > 8 else "***"
            logger.debug(f"Using API key: {masked}")

    def headers(self, authenticated: bool = True) -> Dict[str, str]:
        """Per-request headers. The global heartbeat is sent without the key."""
        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }
        if authenticated:
            headers[AUTH_HEADER] = self.api_key
        return headers

    def create_session(self) -> requests.Session:
        """Creates a requests.Session for the blocking transport."""
        session = requests.Session()
        session.headers.update({
            'User-Agent': 'stockfighter-client/1.0',
        })
        return session
