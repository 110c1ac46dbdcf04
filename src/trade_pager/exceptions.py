"""Exceptions raised by the trade pager."""

from typing import Optional


class PagerError(Exception):
    """Base class for all trade pager errors."""


class ConfigurationError(PagerError):
    """Invalid configuration options. Raised at construction, never retried."""


class TransportError(PagerError):
    """A single HTTP request failed (network error, timeout, bad status or body)."""

    def __init__(self, message: str, url: str, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class FetchFailed(PagerError):
    """A page fetch exhausted its retry budget."""

    def __init__(self, url: str, attempts: int, error: BaseException):
        super().__init__(f"Fetching {url} failed after {attempts} attempts: {error}")
        self.url = url
        self.attempts = attempts
        self.error = error
