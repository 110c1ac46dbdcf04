"""Cursor-advancing pagination over a trade-history feed."""

import asyncio
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from .clients.http_client import AiohttpRequester, Requester
from .config.settings import FetchConfig
from .retry_executor import Page, PageRequest, RetryExecutor

logger = logging.getLogger(__name__)


def last_cursor(page: Any) -> int:
    """Return the ``tid`` of the last item in ``page``, or 0 if there is none."""
    if not isinstance(page, list):
        logger.warning(f"Expected a list of trades, got {type(page).__name__}; treating as empty page")
        return 0
    if not page:
        return 0
    last_item = page[-1]
    if not isinstance(last_item, dict):
        return 0
    return last_item.get('tid') or 0


class Paginator:
    """
    Walks a cursor-paginated feed one page at a time.

    Pages are produced lazily: nothing is fetched, and no delay is slept,
    until the consumer asks for the next page. The sequence ends when a
    fetched page has no cursor to continue from (its last ``tid`` is 0 or
    the page is empty); that page is not yielded. A page whose fetch
    exhausts the retry budget raises ``FetchFailed`` and ends the sequence.
    """

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        requester: Optional[Requester] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        self.config = config or FetchConfig()
        self._owns_requester = requester is None
        self.requester = requester or AiohttpRequester()
        self.sleep = sleep or asyncio.sleep
        self.executor = RetryExecutor(self.config, self.requester, sleep=self.sleep)

        self.stats = {
            'pages_yielded': 0,
            'items_yielded': 0,
            'last_cursor': None
        }

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def close(self):
        """Close the requester if this paginator created it."""
        if self._owns_requester:
            await self.requester.close()

    async def paginate(self, base_url: str, start_cursor: int) -> AsyncIterator[Page]:
        """Yield pages starting after ``start_cursor`` until the feed is exhausted.

        A requester created by the paginator is closed once the sequence ends,
        fails or is closed by the consumer.
        """
        cursor = start_cursor
        logger.info(f"Starting pagination of {base_url} from tid={cursor}")

        try:
            while True:
                page = await self.executor.fetch_with_retry(PageRequest(base_url, cursor))
                last_id = last_cursor(page)

                if not last_id:
                    logger.info(f"No new trades after tid={cursor}, pagination complete")
                    return

                self.stats['pages_yielded'] += 1
                self.stats['items_yielded'] += len(page)
                self.stats['last_cursor'] = last_id
                logger.debug(f"Fetched {len(page)} trades after tid={cursor}, next cursor {last_id}")

                yield page

                await self.sleep(self.config.inter_page_delay_seconds)
                cursor = last_id
        finally:
            await self.close()
