from typing import Any

from fastapi import APIRouter, Query

from movieworld.api.deps import CatalogServiceDep
from movieworld.converters import records as record_converters
from movieworld.core.enums import ContentKind, ContentScope
from movieworld.schemas.catalog import (
    CatalogPagePublic,
    ContentDetailPublic,
    TitleSearchHitPublic,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/trending", response_model=CatalogPagePublic)
async def read_trending(
    catalog_service: CatalogServiceDep,
    page: int = Query(1, ge=1),
    kind: ContentScope = Query(ContentScope.ALL),
) -> CatalogPagePublic:
    if kind is ContentScope.MOVIE:
        result = await catalog_service.get_trending_movies(page)
    elif kind is ContentScope.SERIES:
        result = await catalog_service.get_trending_series(page)
    else:
        result = await catalog_service.get_trending_content(page)
    return record_converters.to_page_public(
        result, per_page=catalog_service.settings.ITEMS_PER_PAGE
    )


@router.get("/search", response_model=CatalogPagePublic)
async def search_catalog(
    catalog_service: CatalogServiceDep,
    query: str = Query(""),
    page: int = Query(1, ge=1),
) -> CatalogPagePublic:
    result = await catalog_service.search_content(query, page)
    return record_converters.to_page_public(
        result, per_page=catalog_service.settings.ITEMS_PER_PAGE
    )


@router.get("/discover", response_model=CatalogPagePublic)
async def discover_catalog(
    catalog_service: CatalogServiceDep,
    scope: ContentScope = Query(ContentScope.ALL),
    page: int = Query(1, ge=1),
    sort_by: str | None = Query(None),
    with_genres: str | None = Query(None),
    year: int | None = Query(None, ge=1800, le=2200),
) -> CatalogPagePublic:
    filters: dict[str, Any] = {
        "page": page,
        "sort_by": sort_by,
        "with_genres": with_genres,
        "year": year,
    }
    result = await catalog_service.discover_content(
        scope, {key: value for key, value in filters.items() if value is not None}
    )
    return record_converters.to_page_public(
        result, per_page=catalog_service.settings.ITEMS_PER_PAGE
    )


@router.get("/title-search", response_model=list[TitleSearchHitPublic])
async def search_titles(
    catalog_service: CatalogServiceDep,
    query: str = Query(""),
    page: int = Query(1, ge=1),
    kind: ContentScope = Query(ContentScope.ALL),
) -> list[TitleSearchHitPublic]:
    """
    Search OMDb titles by name, for resolving IMDb ids.
    """
    kinds = kind.kinds()
    hits = await catalog_service.search_titles(
        query, page, kinds[0] if len(kinds) == 1 else None
    )
    return [record_converters.to_title_search_hit_public(hit) for hit in hits]


# KEEP AT THE BOTTOM
@router.get("/{kind}/{id}", response_model=ContentDetailPublic)
async def read_content(
    *,
    catalog_service: CatalogServiceDep,
    kind: str,
    id: int,
) -> ContentDetailPublic:
    record = await catalog_service.get_content_details(id, ContentKind.parse(kind))
    return record_converters.to_detail_public(record)
