import asyncio
from collections.abc import Iterable
from logging import getLogger
from typing import Protocol

from movieworld.core.enums import ContentKind
from movieworld.exceptions.base import AppError
from movieworld.models.records import Genre

logger = getLogger(__name__)

UNKNOWN_GENRE = "Unknown"


class GenreSource(Protocol):
    async def get_genres(self, kind: ContentKind) -> list[Genre]: ...


def dedupe_genres(*genre_lists: Iterable[Genre]) -> list[Genre]:
    """Concatenate genre lists, keeping the first name seen for each id."""
    by_id: dict[int, Genre] = {}
    for genre_list in genre_lists:
        for genre in genre_list:
            by_id.setdefault(genre.id, genre)
    return list(by_id.values())


class GenreRegistry:
    """
    Process-wide id → name mapping over movie and series genres.

    Built on first use and kept until `invalidate()`. Concurrent first callers
    share a single fetch. A fetch that was in flight when `invalidate()` ran
    is returned to its callers but not stored.
    """

    def __init__(self, source: GenreSource) -> None:
        self.source = source
        self._genres: list[Genre] | None = None
        self._generation = 0
        self._lock = asyncio.Lock()

    async def get_all(self) -> list[Genre]:
        if self._genres is not None:
            return list(self._genres)
        async with self._lock:
            if self._genres is not None:
                return list(self._genres)
            generation = self._generation
            movie_genres, series_genres = await asyncio.gather(
                self.source.get_genres(ContentKind.MOVIE),
                self.source.get_genres(ContentKind.SERIES),
            )
            genres = dedupe_genres(movie_genres, series_genres)
            if generation == self._generation:
                self._genres = genres
                logger.debug("Genre registry built with %d genres", len(genres))
            else:
                logger.debug("Genre registry invalidated during fetch; not storing")
            return list(genres)

    async def names_for(self, ids: Iterable[int]) -> list[str]:
        """Map genre ids to names; unknown ids become "Unknown"."""
        try:
            genres = await self.get_all()
        except AppError:
            logger.exception("Could not build the genre registry")
            return []
        names = {genre.id: genre.name for genre in genres}
        return [names.get(genre_id, UNKNOWN_GENRE) for genre_id in ids]

    def invalidate(self) -> None:
        self._generation += 1
        self._genres = None
