"""Trade pager entry point - prints every page of the trade feed as a table."""

import asyncio
import logging
import os
import sys
from typing import List, Optional, TextIO

from .clients.http_client import AiohttpRequester
from .config.settings import load_settings
from .exceptions import PagerError
from .pagination import Paginator
from .retry_executor import Page
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def format_page(page: Page) -> str:
    """Render a page of trades as a plain-text table, ``tid`` first."""
    if not page:
        return ""

    columns: List[str] = []
    for item in page:
        for key in item:
            if key not in columns:
                columns.append(key)
    if 'tid' in columns:
        columns.remove('tid')
        columns.insert(0, 'tid')

    rows = [[str(item.get(col, "")) for col in columns] for item in page]
    widths = [max(len(col), *(len(row[i]) for row in rows)) for i, col in enumerate(columns)]

    lines = [
        " | ".join(col.ljust(widths[i]) for i, col in enumerate(columns)),
        "-+-".join("-" * w for w in widths),
    ]
    lines.extend(" | ".join(value.ljust(widths[i]) for i, value in enumerate(row)) for row in rows)
    return "\n".join(lines)


async def run(config_file: Optional[str] = None, out: TextIO = sys.stdout) -> int:
    """Page through the configured feed, printing each page. Returns the number of pages."""
    settings = load_settings(config_file)
    setup_logging(settings.logging, settings.service_name)

    async with AiohttpRequester() as requester:
        paginator = Paginator(settings.fetch, requester)
        async for page in paginator.paginate(settings.base_url, settings.start_cursor):
            print(format_page(page), file=out)
            print(file=out)

    logger.info(
        f"Done: {paginator.stats['pages_yielded']} pages, "
        f"{paginator.stats['items_yielded']} trades, last tid={paginator.stats['last_cursor']}"
    )
    return paginator.stats['pages_yielded']


def main():
    """Main entry point."""
    config_file = os.getenv("CONFIG_FILE")

    try:
        asyncio.run(run(config_file))
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping")
    except PagerError as e:
        logger.error(f"Trade pager failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
