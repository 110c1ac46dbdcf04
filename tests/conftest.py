"""Pytest configuration and shared fixtures."""

from typing import Any, Dict, List
from unittest.mock import AsyncMock

import pytest

from trade_pager.config.settings import FetchConfig


class ScriptedRequester:
    """Fake fetch primitive replaying a fixed list of responses.

    Exceptions in the script are raised instead of returned. Every call is
    recorded in ``calls`` as ``(url, method, timeout_ms)``.
    """

    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls = []

    @property
    def urls(self) -> List[str]:
        return [call[0] for call in self.calls]

    async def request(self, url: str, method: str = "GET", timeout_ms: int = 1000) -> Any:
        self.calls.append((url, method, timeout_ms))
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def fast_config() -> FetchConfig:
    """Fetch configuration with small delays."""
    return FetchConfig(
        max_retries=2,
        retry_delay_ms=10,
        request_timeout_ms=10,
        inter_page_delay_ms=200
    )


@pytest.fixture
def mock_sleep() -> AsyncMock:
    """Awaitable sleep that returns immediately and records its calls."""
    return AsyncMock(return_value=None)


@pytest.fixture
def sample_trades() -> List[Dict[str, Any]]:
    """Two consecutive Mercado Bitcoin trades."""
    return [
        {
            "amount": 0.2,
            "date": 1373119254,
            "price": 200,
            "tid": 5701,
            "type": "buy"
        },
        {
            "amount": 0.187,
            "date": 1373122679,
            "price": 201,
            "tid": 5702,
            "type": "sell"
        },
    ]


@pytest.fixture
def scripted_requester():
    """Factory for ScriptedRequester instances."""
    def _create(*responses):
        return ScriptedRequester(list(responses))
    return _create
