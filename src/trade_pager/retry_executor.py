"""Bounded-retry execution of a single page request."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .clients.http_client import Requester
from .config.settings import FetchConfig
from .exceptions import FetchFailed
from .utils.retry import RetryExhausted, retry_with_fixed_delay

logger = logging.getLogger(__name__)

PageItem = Dict[str, Any]
Page = List[PageItem]


@dataclass(frozen=True)
class PageRequest:
    """One page of the feed: everything after ``cursor``."""
    base_url: str
    cursor: int

    @property
    def url(self) -> str:
        return f"{self.base_url}?tid={self.cursor}"


class RetryExecutor:
    """Fetches one page, retrying failed attempts with a fixed delay."""

    def __init__(
        self,
        config: FetchConfig,
        requester: Requester,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        self.config = config
        self.requester = requester
        self.sleep = sleep or asyncio.sleep

    async def fetch_with_retry(self, request: PageRequest) -> Page:
        """
        Fetch ``request`` making at most ``config.max_retries`` attempts.

        Raises:
            FetchFailed: carrying the last transport error once the budget is spent
        """
        url = request.url

        async def _request():
            return await self.requester.request(
                url, method="GET", timeout_ms=self.config.request_timeout_ms
            )

        try:
            return await retry_with_fixed_delay(
                _request,
                max_attempts=self.config.max_retries,
                delay=self.config.retry_delay_seconds,
                sleep=self.sleep,
                label=url,
            )
        except RetryExhausted as e:
            raise FetchFailed(url, e.attempts, e.last_error) from e.last_error
