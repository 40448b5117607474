from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import aiohttp
import pytest

from movieworld.core.cache import ResponseCache
from movieworld.core.config import Settings


class FakeResponse:
    def __init__(self, url: str, status: int = 200, payload: Any = None) -> None:
        self.url = url
        self.status = status
        self._payload = payload

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                SimpleNamespace(real_url=self.url),
                (),
                status=self.status,
                message="fake error",
            )

    async def json(self, content_type: str | None = None) -> Any:
        _ = content_type
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for `aiohttp.ClientSession`; `route` maps (url, params) to (status, payload)."""

    def __init__(self, route: Callable[[str, dict[str, str]], tuple[int, Any]]) -> None:
        self.route = route
        self.calls: list[tuple[str, dict[str, str]]] = []

    def get(self, url: str, params: dict[str, str] | None = None) -> FakeResponse:
        params = dict(params or {})
        self.calls.append((url, params))
        outcome = self.route(url, params)
        if isinstance(outcome, BaseException):
            raise outcome
        status, payload = outcome
        return FakeResponse(url, status, payload)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        TMDB_API_KEY="tmdb-key",
        OMDB_API_KEY="omdb-key",
        HTTP_RETRY_DELAY_SECONDS=0.0,
    )


@pytest.fixture
def cache() -> ResponseCache:
    return ResponseCache(max_entries=100, ttl_seconds=300)


@pytest.fixture
def fake_session() -> Callable[..., FakeSession]:
    return FakeSession


@pytest.fixture
def no_retry_sleep(monkeypatch) -> list[float]:
    """Record retry waits instead of sleeping."""
    from movieworld.clients import http

    delays: list[float] = []

    async def fake_sleep(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr(http.asyncio, "sleep", fake_sleep)
    return delays
