from fastapi import APIRouter, Query

from movieworld.api.deps import CatalogServiceDep
from movieworld.converters import records as record_converters
from movieworld.schemas.catalog import GenrePublic

router = APIRouter(prefix="/genres", tags=["genres"])


@router.get("/", response_model=list[GenrePublic])
async def read_genres(catalog_service: CatalogServiceDep) -> list[GenrePublic]:
    genres = await catalog_service.get_genres()
    return [record_converters.to_genre_public(genre) for genre in genres]


@router.get("/names", response_model=list[str])
async def read_genre_names(
    catalog_service: CatalogServiceDep,
    ids: list[int] = Query(default_factory=list),
) -> list[str]:
    return await catalog_service.convert_genre_ids(ids)
