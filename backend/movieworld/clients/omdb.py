import asyncio
from typing import Any

import aiohttp

from movieworld.clients.http import get_json_async
from movieworld.clients.logger import logger
from movieworld.clients.omdb_parsing import (
    is_invalid_api_key,
    is_no_match,
    is_rate_limited,
    parse_search_hits,
    parse_title,
)
from movieworld.core.cache import ResponseCache, build_cache_key
from movieworld.core.config import Settings
from movieworld.core.enums import ContentKind
from movieworld.exceptions.base import AppError
from movieworld.exceptions.upstream_exceptions import (
    InvalidApiKeyError,
    RateLimitedError,
)
from movieworld.models.records import EnrichmentRecord, SearchHit

SOURCE = "OMDB"


def _check_error_body(payload: dict[str, Any]) -> None:
    """OMDb reports rate limiting and bad keys inside 200 responses."""
    if is_rate_limited(payload):
        raise RateLimitedError(SOURCE)
    if is_invalid_api_key(payload):
        raise InvalidApiKeyError(SOURCE)


class OmdbClient:
    """
    Secondary enrichment source.

    Lookups never raise: a missing title, a transport failure, a malformed body
    and an unusable key all come back as None so a single bad lookup cannot
    abort a wider enrichment pass. Only confirmed answers are cached.
    """

    def __init__(
        self,
        *,
        session: aiohttp.ClientSession,
        settings: Settings,
        cache: ResponseCache,
    ) -> None:
        self.session = session
        self.settings = settings
        self.cache = cache
        self._missing_key_logged = False

    @property
    def api_key(self) -> str | None:
        return self.settings.OMDB_API_KEY

    async def _request(self, operation: str, params: dict[str, str]) -> dict[str, Any] | None:
        if not self.api_key:
            if not self._missing_key_logged:
                logger.warning("OMDb API key is not configured; skipping enrichment lookups.")
                self._missing_key_logged = True
            return None
        try:
            return await get_json_async(
                session=self.session,
                source=SOURCE,
                url=self.settings.OMDB_BASE_URL,
                params={
                    "apikey": self.api_key,
                    "plot": "full",
                    "r": "json",
                    **params,
                },
                max_attempts=self.settings.HTTP_MAX_ATTEMPTS,
                retry_delay=self.settings.HTTP_RETRY_DELAY_SECONDS,
                check_payload=_check_error_body,
            )
        except InvalidApiKeyError:
            logger.error("OMDb rejected the configured API key.")
            return None
        except (AppError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"OMDb {operation} failed for {params}: {e!r}")
            return None

    async def _lookup(self, operation: str, params: dict[str, str]) -> EnrichmentRecord | None:
        key = build_cache_key(SOURCE, operation, params)
        cache_hit, cached = self.cache.get(key)
        if cache_hit:
            return cached

        payload = await self._request(operation, params)
        if payload is None:
            return None
        record = parse_title(payload)
        if record is not None or is_no_match(payload):
            self.cache.set(key, record)
        return record

    async def lookup_by_id(self, imdb_id: str) -> EnrichmentRecord | None:
        if not imdb_id or not imdb_id.strip():
            return None
        return await self._lookup("by_id", {"i": imdb_id.strip()})

    async def lookup_by_title(
        self,
        title: str,
        year: int | str | None = None,
        kind: ContentKind | None = None,
    ) -> EnrichmentRecord | None:
        if not title or not title.strip():
            return None
        params = {"t": title.strip()}
        if year:
            params["y"] = str(year)
        if kind is not None:
            params["type"] = kind.omdb_type
        return await self._lookup("by_title", params)

    async def search(
        self,
        query: str,
        page: int = 1,
        kind: ContentKind | None = None,
    ) -> list[SearchHit]:
        if not query or not query.strip():
            return []
        params = {"s": query.strip(), "page": str(page)}
        if kind is not None:
            params["type"] = kind.omdb_type
        key = build_cache_key(SOURCE, "search", params)
        cache_hit, cached = self.cache.get(key)
        if cache_hit:
            return list(cached)

        payload = await self._request("search", params)
        if payload is None:
            return []
        hits = parse_search_hits(payload)
        self.cache.set(key, hits)
        return list(hits)
