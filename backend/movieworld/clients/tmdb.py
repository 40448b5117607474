import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

import aiohttp
from pydantic import ValidationError

from movieworld.clients.http import get_json_async
from movieworld.clients.logger import logger
from movieworld.clients.tmdb_parsing import parse_details, parse_genres, parse_listing
from movieworld.core.cache import ResponseCache, build_cache_key
from movieworld.core.config import Settings
from movieworld.core.enums import ContentKind
from movieworld.exceptions.base import AppError
from movieworld.exceptions.catalog_exceptions import CatalogFetchError
from movieworld.exceptions.upstream_exceptions import (
    ApiKeyMissingError,
    InvalidApiKeyError,
)
from movieworld.models.records import CanonicalRecord, CatalogPage, Genre

SOURCE = "TMDB"
DEFAULT_DISCOVER_SORT = "popularity.desc"
YEAR_FILTERS = {
    ContentKind.MOVIE: "primary_release_year",
    ContentKind.SERIES: "first_air_date_year",
}
DETAIL_APPENDS = {
    ContentKind.MOVIE: "credits,videos,similar,reviews",
    ContentKind.SERIES: "credits,videos,similar,reviews,external_ids",
}

T = TypeVar("T")


class TmdbClient:
    """Primary catalog source: listings, search, discovery, details and genres."""

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

    @property
    def api_key(self) -> str | None:
        return self.settings.TMDB_API_KEY

    def _url(self, path: str) -> str:
        return f"{self.settings.TMDB_BASE_URL.rstrip('/')}/{path.lstrip('/')}"

    async def _get(self, path: str, params: Mapping[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise ApiKeyMissingError(SOURCE)
        query = {
            "api_key": self.api_key,
            "language": self.settings.TMDB_LANGUAGE,
            **{key: str(value) for key, value in params.items()},
        }
        return await get_json_async(
            session=self.session,
            source=SOURCE,
            url=self._url(path),
            params=query,
            max_attempts=self.settings.HTTP_MAX_ATTEMPTS,
            retry_delay=self.settings.HTTP_RETRY_DELAY_SECONDS,
        )

    async def _cached(
        self,
        operation: str,
        params: Mapping[str, Any],
        fetch: Callable[[], Awaitable[T]],
    ) -> T:
        """Serve `operation` from the cache or run `fetch`, wrapping failures per operation."""
        key = build_cache_key(SOURCE, operation, params)
        cache_hit, cached = self.cache.get(key)
        if cache_hit:
            logger.debug(f"TMDB cache hit for {operation} {dict(params)}")
            return cached
        try:
            result = await fetch()
        except (ApiKeyMissingError, InvalidApiKeyError, CatalogFetchError):
            raise
        except (AppError, aiohttp.ClientError, asyncio.TimeoutError, ValidationError) as e:
            logger.warning(f"TMDB {operation} failed: {e!r}")
            raise CatalogFetchError(operation, str(e)) from e
        self.cache.set(key, result)
        return result

    async def _listing(
        self,
        operation: str,
        path: str,
        params: Mapping[str, Any],
        kind: ContentKind | None = None,
    ) -> CatalogPage:
        async def fetch() -> CatalogPage:
            payload = await self._get(path, params)
            return parse_listing(
                payload,
                image_base_url=self.settings.TMDB_IMAGE_BASE_URL,
                kind=kind,
            )

        page = await self._cached(operation, {"path": path, **params}, fetch)
        # Cached pages are shared; hand out a copy the caller may tag.
        return CatalogPage(
            results=list(page.results),
            page=page.page,
            total_pages=page.total_pages,
            total_results=page.total_results,
        )

    async def get_trending(
        self, page: int = 1, kind: ContentKind | None = None
    ) -> CatalogPage:
        segment = kind.tmdb_segment if kind else "all"
        return await self._listing(
            "trending content",
            f"trending/{segment}/day",
            {"page": page},
            kind=kind,
        )

    async def search(self, query: str, page: int = 1) -> CatalogPage:
        """Multi search over movies and series; blank queries never hit the network."""
        if not query or not query.strip():
            return CatalogPage.empty()
        return await self._listing(
            "search results",
            "search/multi",
            {"query": query.strip(), "page": page},
        )

    async def discover(
        self, kind: ContentKind, filters: Mapping[str, Any] | None = None
    ) -> CatalogPage:
        params = {key: value for key, value in (filters or {}).items() if value is not None}
        if "year" in params:
            params[YEAR_FILTERS[kind]] = params.pop("year")
        params.setdefault("sort_by", DEFAULT_DISCOVER_SORT)
        params.setdefault("page", 1)
        return await self._listing(
            f"discover {kind.value}",
            f"discover/{kind.tmdb_segment}",
            params,
            kind=kind,
        )

    async def get_details(self, tmdb_id: int, kind: ContentKind) -> CanonicalRecord:
        operation = f"{kind.value} details"

        async def fetch() -> CanonicalRecord:
            payload = await self._get(
                f"{kind.tmdb_segment}/{tmdb_id}",
                {"append_to_response": DETAIL_APPENDS[kind]},
            )
            record = parse_details(
                payload,
                kind=kind,
                image_base_url=self.settings.TMDB_IMAGE_BASE_URL,
            )
            if record is None:
                raise CatalogFetchError(operation, "unusable detail payload")
            return record

        return await self._cached(operation, {"id": tmdb_id, "kind": kind.value}, fetch)

    async def get_genres(self, kind: ContentKind) -> list[Genre]:
        async def fetch() -> list[Genre]:
            payload = await self._get(f"genre/{kind.tmdb_segment}/list", {})
            return parse_genres(payload)

        genres = await self._cached(f"{kind.value} genres", {"kind": kind.value}, fetch)
        return list(genres)
