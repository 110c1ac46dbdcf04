"""aiohttp implementation of the single-request fetch primitive."""

import asyncio
import json
import logging
from typing import Any, Optional, Protocol

import aiohttp

from ..exceptions import TransportError

logger = logging.getLogger(__name__)


class Requester(Protocol):
    """Anything that can perform one HTTP request and return the decoded JSON body."""

    async def request(self, url: str, method: str = "GET", timeout_ms: int = 1000) -> Any:
        ...


class AiohttpRequester:
    """Performs single HTTP requests over a shared aiohttp session."""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self):
        """Async context manager entry."""
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(limit=10, limit_per_host=5)
            )
            self._owns_session = True
        return self.session

    async def close(self):
        if self.session and self._owns_session and not self.session.closed:
            await self.session.close()

    async def request(self, url: str, method: str = "GET", timeout_ms: int = 1000) -> Any:
        """Perform one request and decode its JSON body. Raises TransportError on any failure."""
        session = self._ensure_session()
        timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000 if timeout_ms else None)

        logger.debug(f"{method} {url} (timeout={timeout_ms}ms)")

        try:
            async with session.request(method, url, timeout=timeout) as response:
                if response.status >= 400:
                    raise TransportError(
                        f"HTTP {response.status} from {url}", url=url, status=response.status
                    )

                body = await response.text()
                try:
                    return json.loads(body)
                except ValueError as e:
                    raise TransportError(
                        f"Invalid JSON body from {url}: {e}", url=url, status=response.status
                    ) from e
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request to {url} timed out after {timeout_ms}ms", url=url) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e
