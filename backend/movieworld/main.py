"""Application factory for the Movie World backend."""
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp
from fastapi import FastAPI

from movieworld.api.main import api_router
from movieworld.clients.logger import LOG_FORMAT, set_client_log_level
from movieworld.clients.omdb import OmdbClient
from movieworld.clients.tmdb import TmdbClient
from movieworld.core.cache import ResponseCache
from movieworld.core.config import Settings
from movieworld.exceptions.handlers import register_exception_handlers
from movieworld.services.catalog import CatalogService
from movieworld.services.enrichment import EnrichmentEngine
from movieworld.services.genres import GenreRegistry
from movieworld.services.request_tokens import RequestTokenTracker

logger = logging.getLogger(__name__)


def build_catalog_service(
    session: aiohttp.ClientSession, settings: Settings
) -> CatalogService:
    """Wire both sources to one shared response cache and token tracker."""
    cache = ResponseCache(
        max_entries=settings.CACHE_MAX_ENTRIES,
        ttl_seconds=settings.CACHE_TTL_SECONDS,
    )
    tmdb = TmdbClient(session=session, settings=settings, cache=cache)
    omdb = OmdbClient(session=session, settings=settings, cache=cache)
    return CatalogService(
        tmdb=tmdb,
        omdb=omdb,
        engine=EnrichmentEngine(omdb, tokens=RequestTokenTracker()),
        genres=GenreRegistry(tmdb),
        settings=settings,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    timeout = aiohttp.ClientTimeout(total=settings.HTTP_TIMEOUT_SECONDS)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        app.state.catalog_service = build_catalog_service(session, settings)
        status = settings.api_key_status()
        if not status.both:
            logger.warning(status.message)
        yield
    logger.info("HTTP session closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    resolved_settings = settings or Settings()
    level = logging.DEBUG if resolved_settings.DEBUG else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    set_client_log_level(level)

    app = FastAPI(title=resolved_settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = resolved_settings
    register_exception_handlers(app)
    app.include_router(api_router, prefix=resolved_settings.API_V1_STR)
    return app
