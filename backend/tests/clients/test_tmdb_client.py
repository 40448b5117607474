import asyncio

import pytest

from movieworld.clients.tmdb import TmdbClient
from movieworld.core.enums import ContentKind
from movieworld.exceptions.catalog_exceptions import CatalogFetchError
from movieworld.exceptions.upstream_exceptions import (
    ApiKeyMissingError,
    InvalidApiKeyError,
)

TRENDING_PAYLOAD = {
    "page": 1,
    "total_pages": 3,
    "total_results": 45,
    "results": [
        {
            "id": 1,
            "media_type": "movie",
            "title": "Dune",
            "release_date": "2021-09-15",
            "overview": "A noble family becomes embroiled in a war.",
            "vote_average": 7.8,
            "vote_count": 10000,
            "genre_ids": [878, 12, 878],
            "poster_path": "/dune.jpg",
        },
        {
            "id": 2,
            "media_type": "tv",
            "name": "Severance",
            "first_air_date": "2022-02-18",
            "vote_average": 8.4,
        },
        {"id": 3, "media_type": "person", "name": "Zendaya"},
        {"id": 4, "media_type": "movie", "title": "   "},
        {"media_type": "movie", "title": "No id"},
    ],
}


def _client(session, settings, cache) -> TmdbClient:
    return TmdbClient(session=session, settings=settings, cache=cache)


def test_trending_normalizes_mixed_results(fake_session, settings, cache) -> None:
    session = fake_session(lambda url, params: (200, TRENDING_PAYLOAD))
    client = _client(session, settings, cache)

    page = asyncio.run(client.get_trending(1))

    assert [record.title for record in page.results] == ["Dune", "Severance"]
    dune, severance = page.results
    assert dune.kind is ContentKind.MOVIE
    assert dune.year == 2021
    assert dune.genre_ids == (878, 12)
    assert dune.poster_url == "https://image.tmdb.org/t/p/w500/dune.jpg"
    assert severance.kind is ContentKind.SERIES
    assert severance.plot == ""
    assert severance.poster_url is None
    assert (page.page, page.total_pages, page.total_results) == (1, 3, 45)

    url, params = session.calls[0]
    assert url.endswith("/trending/all/day")
    assert params["api_key"] == "tmdb-key"
    assert params["language"] == "en-US"


def test_listing_is_served_from_cache(fake_session, settings, cache) -> None:
    session = fake_session(lambda url, params: (200, TRENDING_PAYLOAD))
    client = _client(session, settings, cache)

    first = asyncio.run(client.get_trending(1))
    first.request_token = 99
    second = asyncio.run(client.get_trending(1))

    assert len(session.calls) == 1
    assert second.request_token == 0
    assert [r.id for r in second.results] == [r.id for r in first.results]


def test_blank_search_makes_no_request(fake_session, settings, cache) -> None:
    session = fake_session(lambda url, params: (200, TRENDING_PAYLOAD))
    client = _client(session, settings, cache)

    page = asyncio.run(client.search("   "))

    assert page.results == []
    assert (page.page, page.total_pages, page.total_results) == (1, 0, 0)
    assert session.calls == []


def test_discover_maps_year_and_defaults_sort(fake_session, settings, cache) -> None:
    session = fake_session(
        lambda url, params: (200, {"page": 2, "total_pages": 5, "total_results": 90, "results": []})
    )
    client = _client(session, settings, cache)

    asyncio.run(client.discover(ContentKind.SERIES, {"year": 2020, "page": 2}))

    url, params = session.calls[0]
    assert url.endswith("/discover/tv")
    assert params["first_air_date_year"] == "2020"
    assert params["sort_by"] == "popularity.desc"
    assert params["page"] == "2"
    assert "year" not in params


def test_missing_key_raises_before_any_request(fake_session, settings, cache) -> None:
    settings.TMDB_API_KEY = None
    session = fake_session(lambda url, params: (200, TRENDING_PAYLOAD))
    client = _client(session, settings, cache)

    with pytest.raises(ApiKeyMissingError):
        asyncio.run(client.get_trending())

    assert session.calls == []


def test_invalid_key_is_not_wrapped(fake_session, settings, cache) -> None:
    session = fake_session(lambda url, params: (401, {}))
    client = _client(session, settings, cache)

    with pytest.raises(InvalidApiKeyError):
        asyncio.run(client.get_trending())


def test_upstream_failure_becomes_catalog_fetch_error(
    fake_session, settings, cache, no_retry_sleep
) -> None:
    session = fake_session(lambda url, params: (500, {}))
    client = _client(session, settings, cache)

    with pytest.raises(CatalogFetchError) as exc_info:
        asyncio.run(client.search("dune"))

    assert exc_info.value.detail.startswith("Failed to fetch search results")
    assert len(session.calls) == settings.HTTP_MAX_ATTEMPTS
    assert cache.size() == 0


def test_series_details_include_external_ids(fake_session, settings, cache) -> None:
    payload = {
        "id": 42,
        "name": "Severance",
        "first_air_date": "2022-02-18",
        "overview": "Office workers have their memories split.",
        "episode_run_time": [55, 50],
        "external_ids": {"imdb_id": "tt11280740"},
        "genres": [{"id": 18, "name": "Drama"}],
        "created_by": [{"name": "Dan Erickson"}],
        "networks": [{"name": "Apple TV+"}],
        "number_of_seasons": 2,
        "credits": {
            "cast": [{"name": f"Actor {i}"} for i in range(12)],
            "crew": [{"name": "Ben Stiller", "job": "Director"}],
        },
        "similar": {"results": [{"id": 7, "name": "Mr. Robot"}]},
    }
    session = fake_session(lambda url, params: (200, payload))
    client = _client(session, settings, cache)

    record = asyncio.run(client.get_details(42, ContentKind.SERIES))

    url, params = session.calls[0]
    assert url.endswith("/tv/42")
    assert params["append_to_response"].endswith(",external_ids")
    assert record.imdb_id == "tt11280740"
    assert record.runtime_minutes == 55
    assert record.genres == ("Drama",)
    assert record.creator == "Dan Erickson"
    assert record.director == "Ben Stiller"
    assert len(record.cast) == 10
    assert [similar.title for similar in record.similar] == ["Mr. Robot"]


def test_malformed_optional_fields_degrade(fake_session, settings, cache) -> None:
    payload = {
        "results": [
            {
                "id": 5,
                "media_type": "movie",
                "title": "Odd",
                "vote_average": "not a number",
                "genre_ids": "oops",
            }
        ]
    }
    session = fake_session(lambda url, params: (200, payload))
    client = _client(session, settings, cache)

    page = asyncio.run(client.get_trending())

    (record,) = page.results
    assert record.rating == 0.0
    assert record.genre_ids == ()


def test_genres_are_parsed_per_kind(fake_session, settings, cache) -> None:
    payload = {"genres": [{"id": 28, "name": "Action"}, {"id": "bad"}]}
    session = fake_session(lambda url, params: (200, payload))
    client = _client(session, settings, cache)

    genres = asyncio.run(client.get_genres(ContentKind.MOVIE))

    assert [(genre.id, genre.name) for genre in genres] == [(28, "Action")]
    assert session.calls[0][0].endswith("/genre/movie/list")


def test_listing_identity_is_kind_and_id(fake_session, settings, cache) -> None:
    payload = {
        "results": [
            {"id": 7, "media_type": "movie", "title": "Seven"},
            {"id": 7, "media_type": "tv", "name": "Seven Seas"},
            {"id": 7, "media_type": "movie", "title": "Seven (again)"},
        ]
    }
    session = fake_session(lambda url, params: (200, payload))
    client = _client(session, settings, cache)

    page = asyncio.run(client.search("seven"))

    assert [(record.key, record.title) for record in page.results] == [
        ((ContentKind.MOVIE, 7), "Seven"),
        ((ContentKind.SERIES, 7), "Seven Seas"),
    ]
