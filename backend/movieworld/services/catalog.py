from collections.abc import Mapping
from logging import getLogger
from typing import Any

from movieworld.clients.omdb import OmdbClient
from movieworld.clients.tmdb import TmdbClient
from movieworld.core.config import ApiKeyStatus, Settings
from movieworld.core.enums import ContentKind, ContentScope
from movieworld.models.records import (
    CatalogPage,
    Genre,
    MergedRecord,
    SearchHit,
    dedupe_records,
)
from movieworld.services.enrichment import EnrichmentEngine
from movieworld.services.genres import GenreRegistry
from movieworld.services.merge import merge_detailed
from movieworld.services.request_tokens import RequestTokenTracker

logger = getLogger(__name__)

TRENDING_CHANNEL = "trending"
SEARCH_CHANNEL = "search"
DISCOVER_CHANNEL = "discover"


class CatalogService:
    """Entry point for callers: catalog pages and details, enriched and tagged."""

    def __init__(
        self,
        *,
        tmdb: TmdbClient,
        omdb: OmdbClient,
        engine: EnrichmentEngine,
        genres: GenreRegistry,
        settings: Settings,
    ) -> None:
        self.tmdb = tmdb
        self.omdb = omdb
        self.engine = engine
        self.genres = genres
        self.settings = settings

    @property
    def tokens(self) -> RequestTokenTracker:
        return self.engine.tokens

    async def _enrich_page(
        self, listing: CatalogPage, channel: str, token: int
    ) -> CatalogPage:
        token, merged = await self.engine.enrich_tagged(
            listing.results,
            channel=channel,
            concurrency=self.settings.ENRICHMENT_CONCURRENCY,
            token=token,
        )
        return CatalogPage(
            results=merged,
            page=listing.page,
            total_pages=listing.total_pages,
            total_results=listing.total_results,
            request_token=token,
            page_size=listing.page_size,
        )

    async def _trending(self, page: int, kind: ContentKind | None) -> CatalogPage:
        token = self.tokens.issue(TRENDING_CHANNEL)
        listing = await self.tmdb.get_trending(page, kind=kind)
        return await self._enrich_page(listing, TRENDING_CHANNEL, token)

    async def get_trending_content(self, page: int = 1) -> CatalogPage:
        return await self._trending(page, None)

    async def get_trending_movies(self, page: int = 1) -> CatalogPage:
        return await self._trending(page, ContentKind.MOVIE)

    async def get_trending_series(self, page: int = 1) -> CatalogPage:
        return await self._trending(page, ContentKind.SERIES)

    async def search_content(self, query: str, page: int = 1) -> CatalogPage:
        token = self.tokens.issue(SEARCH_CHANNEL)
        if not query or not query.strip():
            empty = CatalogPage.empty()
            empty.request_token = token
            return empty
        listing = await self.tmdb.search(query, page)
        return await self._enrich_page(listing, SEARCH_CHANNEL, token)

    async def discover_content(
        self,
        scope: ContentScope = ContentScope.ALL,
        filters: Mapping[str, Any] | None = None,
    ) -> CatalogPage:
        """
        Discover titles for one or both kinds.

        With both kinds, movie results come first, `total_pages` is the larger
        of the two and `total_results` their sum. One combined page holds a
        page of each kind, so its page size is the sum of theirs.
        """
        token = self.tokens.issue(DISCOVER_CHANNEL)
        listings = [await self.tmdb.discover(kind, filters) for kind in scope.kinds()]
        combined = CatalogPage(
            results=dedupe_records(
                record for listing in listings for record in listing.results
            ),
            page=int((filters or {}).get("page") or 1),
            total_pages=max(listing.total_pages for listing in listings),
            total_results=sum(listing.total_results for listing in listings),
            page_size=self.settings.ITEMS_PER_PAGE * len(listings),
        )
        return await self._enrich_page(combined, DISCOVER_CHANNEL, token)

    async def get_content_details(self, tmdb_id: int, kind: ContentKind) -> MergedRecord:
        """Detail view: OMDb by IMDb id first, then by title and year."""
        primary = await self.tmdb.get_details(tmdb_id, kind)

        enrichment = None
        if primary.imdb_id:
            enrichment = await self.omdb.lookup_by_id(primary.imdb_id)
        if enrichment is None:
            enrichment = await self.omdb.lookup_by_title(primary.title, primary.year, kind)
        if enrichment is None:
            logger.debug("No enrichment found for %s %s", kind.value, tmdb_id)
        return merge_detailed(primary, enrichment)

    async def search_titles(
        self, query: str, page: int = 1, kind: ContentKind | None = None
    ) -> list[SearchHit]:
        """Lightweight OMDb title search, e.g. to resolve an IMDb id by name."""
        return await self.omdb.search(query, page=page, kind=kind)

    async def get_genres(self) -> list[Genre]:
        return await self.genres.get_all()

    async def convert_genre_ids(self, genre_ids: list[int]) -> list[str]:
        return await self.genres.names_for(genre_ids)

    def is_configured(self) -> ApiKeyStatus:
        return self.settings.api_key_status()

    def is_current(self, page: CatalogPage, channel: str) -> bool:
        """False when a newer request on `channel` has started since `page` was requested."""
        return self.tokens.is_latest(channel, page.request_token)
