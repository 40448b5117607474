from enum import Enum, unique

from movieworld.exceptions.catalog_exceptions import UnsupportedContentKindError

_TMDB_MEDIA_TYPES = {"movie": "movie", "tv": "series"}
_OMDB_TYPES = {"movie": "movie", "series": "series"}


@unique
class ContentKind(str, Enum):
    MOVIE = "movie"
    SERIES = "series"

    @property
    def tmdb_segment(self) -> str:
        """Path segment TMDB uses for this kind (`movie` or `tv`)."""
        return "movie" if self is ContentKind.MOVIE else "tv"

    @property
    def omdb_type(self) -> str:
        return self.value

    @classmethod
    def from_tmdb(cls, media_type: object) -> "ContentKind | None":
        if not isinstance(media_type, str):
            return None
        value = _TMDB_MEDIA_TYPES.get(media_type.strip().lower())
        return cls(value) if value else None

    @classmethod
    def from_omdb(cls, omdb_type: object) -> "ContentKind | None":
        if not isinstance(omdb_type, str):
            return None
        value = _OMDB_TYPES.get(omdb_type.strip().lower())
        return cls(value) if value else None

    @classmethod
    def parse(cls, raw: str) -> "ContentKind":
        """Accept our own names and TMDB's `tv` alias; anything else is rejected."""
        normalized = raw.strip().lower()
        if normalized == "tv":
            return cls.SERIES
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedContentKindError(raw) from None


@unique
class ContentScope(str, Enum):
    ALL = "all"
    MOVIE = "movie"
    SERIES = "series"

    def kinds(self) -> list[ContentKind]:
        if self is ContentScope.MOVIE:
            return [ContentKind.MOVIE]
        if self is ContentScope.SERIES:
            return [ContentKind.SERIES]
        return [ContentKind.MOVIE, ContentKind.SERIES]
