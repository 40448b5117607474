from pydantic import BaseModel

from movieworld.core.enums import ContentKind

__all__ = [
    "ContentSummaryPublic",
    "ContentDetailPublic",
    "PaginationPublic",
    "ItemsRangePublic",
    "CatalogPagePublic",
    "GenrePublic",
    "ConfigStatusPublic",
    "TitleSearchHitPublic",
]


class ContentSummaryPublic(BaseModel):
    key: str
    id: int
    title: str
    kind: ContentKind
    year: int | None = None
    genre_ids: list[int] = []
    plot: str
    rating: float
    primary_rating: float
    imdb_rating: float | None = None
    rotten_tomatoes: int | None = None
    metacritic: int | None = None
    popularity: float = 0.0
    vote_count: int = 0
    vote_count_display: str
    poster_url: str | None = None
    backdrop_url: str | None = None
    release_date: str = ""
    original_language: str = "en"
    imdb_id: str | None = None
    director: str | None = None
    cast: list[str] = []
    runtime_minutes: int | None = None
    runtime_display: str
    rated: str | None = None
    awards: str | None = None
    writer: str | None = None
    box_office: str | None = None
    box_office_display: str
    language: str | None = None
    country: str | None = None
    enriched: bool = False


class ContentDetailPublic(ContentSummaryPublic):
    genres: list[str] = []
    creator: str | None = None
    budget: int | None = None
    revenue: int | None = None
    production_companies: list[str] = []
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    networks: list[str] = []
    metascore: float | None = None
    imdb_votes: int | None = None
    imdb_votes_display: str
    dvd: str | None = None
    website: str | None = None
    production: str | None = None
    total_seasons: int | None = None
    similar: list[int] = []


class PaginationPublic(BaseModel):
    page: int
    total_pages: int
    total_results: int
    has_next_page: bool
    has_prev_page: bool
    is_first_page: bool
    is_last_page: bool


class ItemsRangePublic(BaseModel):
    start: int
    end: int


class CatalogPagePublic(BaseModel):
    results: list[ContentSummaryPublic]
    pagination: PaginationPublic
    page_window: list[int]
    items: ItemsRangePublic
    request_token: int


class GenrePublic(BaseModel):
    id: int
    name: str


class ConfigStatusPublic(BaseModel):
    tmdb: bool
    omdb: bool
    both: bool
    missing: list[str]
    message: str | None = None


class TitleSearchHitPublic(BaseModel):
    imdb_id: str
    title: str
    year: str | None = None
    kind: ContentKind | None = None
    poster_url: str | None = None
