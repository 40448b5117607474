from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from movieworld.core.enums import ContentKind


@dataclass(frozen=True)
class Genre:
    id: int
    name: str


@dataclass(frozen=True)
class CanonicalRecord:
    """One title from the primary catalog, normalized across movie and series payloads."""

    id: int
    title: str
    kind: ContentKind
    year: int | None = None
    genre_ids: tuple[int, ...] = ()
    plot: str = ""
    rating: float = 0.0
    popularity: float = 0.0
    vote_count: int = 0
    poster_url: str | None = None
    backdrop_url: str | None = None
    release_date: str = ""
    original_language: str = "en"
    # Filled by detail lookups only.
    imdb_id: str | None = None
    genres: tuple[str, ...] = ()
    runtime_minutes: int | None = None
    cast: tuple[str, ...] = ()
    director: str | None = None
    creator: str | None = None
    budget: int | None = None
    revenue: int | None = None
    production_companies: tuple[str, ...] = ()
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    networks: tuple[str, ...] = ()
    similar: tuple["CanonicalRecord", ...] = ()

    @property
    def key(self) -> tuple[ContentKind, int]:
        """TMDB ids are only unique per kind."""
        return self.kind, self.id


@dataclass(frozen=True)
class EnrichmentRecord:
    """Supplementary per-title data from the secondary source."""

    imdb_id: str | None = None
    title: str | None = None
    year: str | None = None
    kind: ContentKind | None = None
    ratings: dict[str, Any] = field(default_factory=dict)
    imdb_rating: float | None = None
    metascore: float | None = None
    imdb_votes: int | None = None
    plot: str | None = None
    actors: tuple[str, ...] = ()
    director: str | None = None
    writer: str | None = None
    rated: str | None = None
    released: str | None = None
    genres: tuple[str, ...] = ()
    language: str | None = None
    country: str | None = None
    awards: str | None = None
    poster_url: str | None = None
    box_office: str | None = None
    runtime_minutes: int | None = None
    total_seasons: int | None = None
    dvd: str | None = None
    production: str | None = None
    website: str | None = None


@dataclass(frozen=True)
class SearchHit:
    imdb_id: str
    title: str
    year: str | None
    kind: ContentKind | None
    poster_url: str | None


@dataclass(frozen=True)
class MergedRecord(CanonicalRecord):
    primary_rating: float = 0.0
    imdb_rating: float | None = None
    rotten_tomatoes: int | None = None
    metacritic: int | None = None
    rated: str | None = None
    awards: str | None = None
    writer: str | None = None
    box_office: str | None = None
    language: str | None = None
    country: str | None = None
    enriched: bool = False
    # Filled by detail merges only.
    metascore: float | None = None
    imdb_votes: int | None = None
    dvd: str | None = None
    website: str | None = None
    production: str | None = None
    total_seasons: int | None = None


@dataclass
class CatalogPage:
    results: list[Any]
    page: int
    total_pages: int
    total_results: int
    request_token: int = 0
    # Set when the page combines several listings and holds more than one page of items.
    page_size: int | None = None

    @classmethod
    def empty(cls) -> "CatalogPage":
        return cls(results=[], page=1, total_pages=0, total_results=0)


def dedupe_records(records: Iterable[CanonicalRecord]) -> list[CanonicalRecord]:
    """Drop repeated `(kind, id)` entries, keeping the first occurrence."""
    by_key: dict[tuple[ContentKind, int], CanonicalRecord] = {}
    for record in records:
        by_key.setdefault(record.key, record)
    return list(by_key.values())
