from movieworld.core.config import ApiKeyStatus
from movieworld.core.formatting import (
    format_box_office,
    format_runtime,
    format_vote_count,
)
from movieworld.core.pagination import items_range, page_window, pagination_info
from movieworld.models.records import CatalogPage, Genre, MergedRecord, SearchHit
from movieworld.schemas.catalog import (
    CatalogPagePublic,
    ConfigStatusPublic,
    ContentDetailPublic,
    ContentSummaryPublic,
    GenrePublic,
    ItemsRangePublic,
    PaginationPublic,
    TitleSearchHitPublic,
)

NO_PLOT = "No plot available"


def _summary_fields(record: MergedRecord) -> dict:
    return dict(
        key=f"{record.kind.value}:{record.id}",
        id=record.id,
        title=record.title,
        kind=record.kind,
        year=record.year,
        genre_ids=list(record.genre_ids),
        plot=record.plot or NO_PLOT,
        rating=record.rating,
        primary_rating=record.primary_rating,
        imdb_rating=record.imdb_rating,
        rotten_tomatoes=record.rotten_tomatoes,
        metacritic=record.metacritic,
        popularity=record.popularity,
        vote_count=record.vote_count,
        vote_count_display=format_vote_count(record.vote_count),
        poster_url=record.poster_url,
        backdrop_url=record.backdrop_url,
        release_date=record.release_date,
        original_language=record.original_language,
        imdb_id=record.imdb_id,
        director=record.director,
        cast=list(record.cast),
        runtime_minutes=record.runtime_minutes,
        runtime_display=format_runtime(record.runtime_minutes),
        rated=record.rated,
        awards=record.awards,
        writer=record.writer,
        box_office=record.box_office,
        box_office_display=format_box_office(record.box_office),
        language=record.language,
        country=record.country,
        enriched=record.enriched,
    )


def to_summary_public(record: MergedRecord) -> ContentSummaryPublic:
    return ContentSummaryPublic(**_summary_fields(record))


def to_detail_public(record: MergedRecord) -> ContentDetailPublic:
    """
    Convert a detail-merged record to its public schema.

    Similar titles are reduced to their ids; callers fetch them separately.
    """
    return ContentDetailPublic(
        **_summary_fields(record),
        genres=list(record.genres),
        creator=record.creator,
        budget=record.budget,
        revenue=record.revenue,
        production_companies=list(record.production_companies),
        number_of_seasons=record.number_of_seasons,
        number_of_episodes=record.number_of_episodes,
        networks=list(record.networks),
        metascore=record.metascore,
        imdb_votes=record.imdb_votes,
        imdb_votes_display=format_vote_count(record.imdb_votes),
        dvd=record.dvd,
        website=record.website,
        production=record.production,
        total_seasons=record.total_seasons,
        similar=[similar.id for similar in record.similar],
    )


def to_page_public(page: CatalogPage, *, per_page: int) -> CatalogPagePublic:
    state = pagination_info(page.page, page.total_pages, page.total_results)
    shown = items_range(page.page, page.page_size or per_page, page.total_results)
    return CatalogPagePublic(
        results=[to_summary_public(record) for record in page.results],
        pagination=PaginationPublic(
            page=state.page,
            total_pages=state.total_pages,
            total_results=state.total_results,
            has_next_page=state.has_next_page,
            has_prev_page=state.has_prev_page,
            is_first_page=state.is_first_page,
            is_last_page=state.is_last_page,
        ),
        page_window=page_window(page.page, page.total_pages),
        items=ItemsRangePublic(start=shown.start, end=shown.end),
        request_token=page.request_token,
    )


def to_genre_public(genre: Genre) -> GenrePublic:
    return GenrePublic(id=genre.id, name=genre.name)


def to_config_status_public(status: ApiKeyStatus) -> ConfigStatusPublic:
    return ConfigStatusPublic(
        tmdb=status.tmdb,
        omdb=status.omdb,
        both=status.both,
        missing=status.missing,
        message=status.message,
    )


def to_title_search_hit_public(hit: SearchHit) -> TitleSearchHitPublic:
    return TitleSearchHitPublic(
        imdb_id=hit.imdb_id,
        title=hit.title,
        year=hit.year,
        kind=hit.kind,
        poster_url=hit.poster_url,
    )
