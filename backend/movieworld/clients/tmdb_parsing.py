from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from movieworld.clients.logger import logger
from movieworld.core.enums import ContentKind
from movieworld.models.records import CanonicalRecord, CatalogPage, Genre, dedupe_records

POSTER_SIZE = "w500"
BACKDROP_SIZE = "w1280"
DETAIL_CAST_LIMIT = 10


class _TmdbModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="wrap")
    @classmethod
    def _degrade_malformed_field(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        """Replace an optional field that fails validation with its default."""
        try:
            return handler(value)
        except ValidationError:
            field_name = info.field_name or ""
            field = cls.model_fields.get(field_name)
            if field is None or field.is_required():
                raise
            logger.debug(f"Ignoring malformed TMDB field {cls.__name__}.{field_name}")
            return field.get_default(call_default_factory=True)


class TmdbNamed(_TmdbModel):
    name: str = ""


class TmdbGenrePayload(_TmdbModel):
    id: int
    name: str


class TmdbGenreListPayload(_TmdbModel):
    genres: list[dict[str, Any]] = []


class TmdbCrewMember(TmdbNamed):
    job: str | None = None


class TmdbCredits(_TmdbModel):
    cast: list[TmdbNamed] = []
    crew: list[TmdbCrewMember] = []


class TmdbListingPayload(_TmdbModel):
    results: list[Any] = []
    page: int = 1
    total_pages: int = 0
    total_results: int = 0


class TmdbItemPayload(_TmdbModel):
    id: int
    media_type: str | None = None
    title: str | None = None
    name: str | None = None
    overview: str | None = None
    release_date: str | None = None
    first_air_date: str | None = None
    genre_ids: list[int] = []
    vote_average: float | None = None
    vote_count: int | None = None
    popularity: float | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    original_language: str | None = None


class TmdbDetailPayload(TmdbItemPayload):
    imdb_id: str | None = None
    external_ids: dict[str, Any] = {}
    genres: list[TmdbNamed] = []
    runtime: int | None = None
    episode_run_time: list[int] = []
    budget: int | None = None
    revenue: int | None = None
    credits: TmdbCredits = TmdbCredits()
    production_companies: list[TmdbNamed] = []
    created_by: list[TmdbNamed] = []
    networks: list[TmdbNamed] = []
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    similar: TmdbListingPayload = TmdbListingPayload()


def image_url(base_url: str, path: str | None, size: str) -> str | None:
    if not path or not path.strip():
        return None
    return f"{base_url.rstrip('/')}/{size}{path}"


def _parse_year(date_text: str) -> int | None:
    if len(date_text) < 4 or not date_text[:4].isdigit():
        return None
    return int(date_text[:4])


def _clean(value: str | None) -> str:
    return value.strip() if isinstance(value, str) else ""


def _names(items: list[TmdbNamed], limit: int | None = None) -> tuple[str, ...]:
    names = [item.name.strip() for item in items if item.name.strip()]
    return tuple(names[:limit] if limit is not None else names)


def _dedupe_ints(values: list[int]) -> tuple[int, ...]:
    return tuple(dict.fromkeys(values))


def _record_fields(
    item: TmdbItemPayload,
    kind: ContentKind,
    image_base_url: str,
) -> dict[str, Any] | None:
    title = _clean(item.title) or _clean(item.name)
    if not title:
        return None
    release_date = _clean(item.release_date) or _clean(item.first_air_date)
    return {
        "id": item.id,
        "title": title,
        "kind": kind,
        "year": _parse_year(release_date),
        "genre_ids": _dedupe_ints(item.genre_ids),
        "plot": _clean(item.overview),
        "rating": float(item.vote_average or 0.0),
        "popularity": float(item.popularity or 0.0),
        "vote_count": int(item.vote_count or 0),
        "poster_url": image_url(image_base_url, item.poster_path, POSTER_SIZE),
        "backdrop_url": image_url(image_base_url, item.backdrop_path, BACKDROP_SIZE),
        "release_date": release_date,
        "original_language": _clean(item.original_language) or "en",
    }


def parse_catalog_item(
    payload: Any,
    *,
    image_base_url: str,
    kind: ContentKind | None = None,
) -> CanonicalRecord | None:
    """
    Normalize one listing entry.

    Mixed listings (trending/all, search/multi) carry `media_type`; single-kind
    listings pass `kind` explicitly. People and other non-title entries are
    dropped.
    """
    if not isinstance(payload, dict):
        return None
    try:
        item = TmdbItemPayload.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Skipping malformed TMDB item: {e.error_count()} error(s)")
        return None

    resolved_kind = kind or ContentKind.from_tmdb(item.media_type)
    if resolved_kind is None:
        return None
    fields = _record_fields(item, resolved_kind, image_base_url)
    if fields is None:
        logger.warning(f"Skipping TMDB item {item.id} without a title")
        return None
    return CanonicalRecord(**fields)


def parse_listing(
    payload: dict[str, Any],
    *,
    image_base_url: str,
    kind: ContentKind | None = None,
) -> CatalogPage:
    listing = TmdbListingPayload.model_validate(payload)
    records: list[CanonicalRecord] = []
    for raw_item in listing.results:
        record = parse_catalog_item(raw_item, image_base_url=image_base_url, kind=kind)
        if record is not None:
            records.append(record)
    return CatalogPage(
        results=dedupe_records(records),
        page=max(1, listing.page),
        total_pages=max(0, listing.total_pages),
        total_results=max(0, listing.total_results),
    )


def parse_details(
    payload: dict[str, Any],
    *,
    kind: ContentKind,
    image_base_url: str,
) -> CanonicalRecord | None:
    """Normalize a movie or tv detail payload, including credits and similar titles."""
    try:
        item = TmdbDetailPayload.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Malformed TMDB detail payload: {e.error_count()} error(s)")
        return None
    fields = _record_fields(item, kind, image_base_url)
    if fields is None:
        return None

    imdb_id = _clean(item.imdb_id) or _clean(item.external_ids.get("imdb_id"))
    if kind is ContentKind.MOVIE:
        runtime = item.runtime
    else:
        runtime = item.episode_run_time[0] if item.episode_run_time else None
    director = next(
        (
            member.name.strip()
            for member in item.credits.crew
            if member.job == "Director" and member.name.strip()
        ),
        None,
    )
    creators = _names(item.created_by, limit=1)
    similar = tuple(
        record
        for record in (
            parse_catalog_item(raw, image_base_url=image_base_url, kind=kind)
            for raw in item.similar.results
        )
        if record is not None
    )

    return CanonicalRecord(
        **fields,
        imdb_id=imdb_id or None,
        genres=_names(item.genres),
        runtime_minutes=runtime if runtime and runtime > 0 else None,
        cast=_names(item.credits.cast, limit=DETAIL_CAST_LIMIT),
        director=director,
        creator=creators[0] if creators else None,
        budget=item.budget or None,
        revenue=item.revenue or None,
        production_companies=_names(item.production_companies),
        number_of_seasons=item.number_of_seasons,
        number_of_episodes=item.number_of_episodes,
        networks=_names(item.networks),
        similar=similar,
    )


def parse_genres(payload: dict[str, Any]) -> list[Genre]:
    genre_list = TmdbGenreListPayload.model_validate(payload)
    genres: list[Genre] = []
    for raw_genre in genre_list.genres:
        try:
            genre = TmdbGenrePayload.model_validate(raw_genre)
        except ValidationError:
            logger.warning(f"Skipping malformed TMDB genre: {raw_genre!r}")
            continue
        genres.append(Genre(id=genre.id, name=genre.name))
    return genres
