import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from movieworld.clients.logger import logger
from movieworld.core.enums import ContentKind
from movieworld.models.records import EnrichmentRecord, SearchHit

NOT_AVAILABLE = "N/A"
_RUNTIME_RE = re.compile(r"(\d+)")
_KNOWN_RATING_SOURCES = {
    "Internet Movie Database": "imdb",
    "Rotten Tomatoes": "rotten_tomatoes",
    "Metacritic": "metacritic",
}


class _OmdbModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _drop_not_available(cls, value: Any) -> Any:
        """OMDb spells missing values as "N/A"; anything else non-string is dropped too."""
        if isinstance(value, str):
            value = value.strip()
            return None if value in ("", NOT_AVAILABLE) else value
        if isinstance(value, list):
            return value
        return None


class OmdbRatingPayload(_OmdbModel):
    source: str | None = Field(default=None, alias="Source")
    value: str | None = Field(default=None, alias="Value")


class OmdbTitlePayload(_OmdbModel):
    imdb_id: str | None = Field(default=None, alias="imdbID")
    title: str | None = Field(default=None, alias="Title")
    year: str | None = Field(default=None, alias="Year")
    rated: str | None = Field(default=None, alias="Rated")
    released: str | None = Field(default=None, alias="Released")
    runtime: str | None = Field(default=None, alias="Runtime")
    genre: str | None = Field(default=None, alias="Genre")
    director: str | None = Field(default=None, alias="Director")
    writer: str | None = Field(default=None, alias="Writer")
    actors: str | None = Field(default=None, alias="Actors")
    plot: str | None = Field(default=None, alias="Plot")
    language: str | None = Field(default=None, alias="Language")
    country: str | None = Field(default=None, alias="Country")
    awards: str | None = Field(default=None, alias="Awards")
    poster: str | None = Field(default=None, alias="Poster")
    ratings: list[Any] | None = Field(default=None, alias="Ratings")
    metascore: str | None = Field(default=None, alias="Metascore")
    imdb_rating: str | None = Field(default=None, alias="imdbRating")
    imdb_votes: str | None = Field(default=None, alias="imdbVotes")
    type: str | None = Field(default=None, alias="Type")
    dvd: str | None = Field(default=None, alias="DVD")
    box_office: str | None = Field(default=None, alias="BoxOffice")
    production: str | None = Field(default=None, alias="Production")
    website: str | None = Field(default=None, alias="Website")
    total_seasons: str | None = Field(default=None, alias="totalSeasons")


def is_no_match(payload: dict[str, Any]) -> bool:
    return str(payload.get("Response", "")).lower() == "false"


def error_message(payload: dict[str, Any]) -> str:
    error = payload.get("Error")
    return error if isinstance(error, str) else ""


def is_rate_limited(payload: dict[str, Any]) -> bool:
    return is_no_match(payload) and "limit" in error_message(payload).lower()


def is_invalid_api_key(payload: dict[str, Any]) -> bool:
    return is_no_match(payload) and "api key" in error_message(payload).lower()


def _safe_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value.replace(",", ""))
    except ValueError:
        logger.debug(f"Ignoring non-numeric OMDb value {value!r}")
        return None


def _safe_int(value: str | None) -> int | None:
    parsed = _safe_float(value)
    return int(parsed) if parsed is not None else None


def _split_list(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def parse_runtime_minutes(value: str | None) -> int | None:
    """Turn `"142 min"` into 142."""
    if not value:
        return None
    match = _RUNTIME_RE.search(value)
    if not match:
        return None
    minutes = int(match.group(1))
    return minutes if minutes > 0 else None


def parse_rating_value(source: str, value: str) -> Any:
    """`8.8/10` → 8.8, `87%` → 87, `74/100` → 74; unknown sources keep the raw string."""
    if source == "imdb":
        return _safe_float(value.split("/")[0])
    if source == "rotten_tomatoes":
        return _safe_int(value.replace("%", ""))
    if source == "metacritic":
        return _safe_int(value.split("/")[0])
    return value


def parse_ratings(items: list[Any]) -> dict[str, Any]:
    ratings: dict[str, Any] = {}
    for item in items:
        try:
            rating = OmdbRatingPayload.model_validate(item)
        except ValidationError:
            logger.debug(f"Ignoring malformed OMDb rating {item!r}")
            continue
        if not rating.source or rating.value is None:
            continue
        key = _KNOWN_RATING_SOURCES.get(
            rating.source, re.sub(r"\s+", "_", rating.source.lower())
        )
        parsed = parse_rating_value(key, rating.value)
        if parsed is not None:
            ratings[key] = parsed
    return ratings


def parse_title(payload: dict[str, Any]) -> EnrichmentRecord | None:
    """Normalize a single-title OMDb payload; the "Response": "False" sentinel gives None."""
    if is_no_match(payload):
        return None
    try:
        data = OmdbTitlePayload.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Malformed OMDb payload: {e.error_count()} error(s)")
        return None

    ratings = parse_ratings(data.ratings or [])
    imdb_rating = _safe_float(data.imdb_rating)
    if imdb_rating is None:
        imdb_rating = ratings.get("imdb")

    return EnrichmentRecord(
        imdb_id=data.imdb_id,
        title=data.title,
        year=data.year,
        kind=ContentKind.from_omdb(data.type),
        ratings=ratings,
        imdb_rating=imdb_rating,
        metascore=_safe_float(data.metascore),
        imdb_votes=_safe_int(data.imdb_votes),
        plot=data.plot,
        actors=_split_list(data.actors),
        director=data.director,
        writer=data.writer,
        rated=data.rated,
        released=data.released,
        genres=_split_list(data.genre),
        language=data.language,
        country=data.country,
        awards=data.awards,
        poster_url=data.poster,
        box_office=data.box_office,
        runtime_minutes=parse_runtime_minutes(data.runtime),
        total_seasons=_safe_int(data.total_seasons),
        dvd=data.dvd,
        production=data.production,
        website=data.website,
    )


def parse_search_hits(payload: dict[str, Any]) -> list[SearchHit]:
    if is_no_match(payload):
        return []
    raw_hits = payload.get("Search")
    if not isinstance(raw_hits, list):
        return []
    hits: list[SearchHit] = []
    for raw_hit in raw_hits:
        try:
            data = OmdbTitlePayload.model_validate(raw_hit)
        except ValidationError:
            continue
        if not data.imdb_id or not data.title:
            continue
        hits.append(
            SearchHit(
                imdb_id=data.imdb_id,
                title=data.title,
                year=data.year,
                kind=ContentKind.from_omdb(data.type),
                poster_url=data.poster,
            )
        )
    return hits
