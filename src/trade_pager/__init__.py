"""
Trade Pager - cursor-paginated trade history fetcher.

This package walks a trade-history feed page by page, advancing a transaction
id cursor, retrying failed requests with a fixed delay and throttling
successive page requests.
"""

from .config.settings import FetchConfig, PagerSettings, load_settings
from .exceptions import ConfigurationError, FetchFailed, PagerError, TransportError
from .pagination import Paginator
from .retry_executor import PageRequest, RetryExecutor

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "FetchConfig",
    "FetchFailed",
    "PageRequest",
    "PagerError",
    "PagerSettings",
    "Paginator",
    "RetryExecutor",
    "TransportError",
    "load_settings",
]
