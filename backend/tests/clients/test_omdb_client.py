import asyncio

from movieworld.clients.omdb import OmdbClient
from movieworld.clients.omdb_parsing import parse_runtime_minutes, parse_title
from movieworld.core.enums import ContentKind

TITLE_PAYLOAD = {
    "Title": "Inception",
    "Year": "2010",
    "Rated": "PG-13",
    "Runtime": "148 min",
    "Genre": "Action, Sci-Fi",
    "Director": "Christopher Nolan",
    "Writer": "Christopher Nolan",
    "Actors": "Leonardo DiCaprio, Joseph Gordon-Levitt",
    "Plot": "A thief who steals corporate secrets through dream-sharing technology.",
    "Awards": "Won 4 Oscars",
    "Ratings": [
        {"Source": "Internet Movie Database", "Value": "8.8/10"},
        {"Source": "Rotten Tomatoes", "Value": "87%"},
        {"Source": "Metacritic", "Value": "74/100"},
    ],
    "Metascore": "74",
    "imdbRating": "8.8",
    "imdbVotes": "2,345,678",
    "imdbID": "tt1375666",
    "Type": "movie",
    "BoxOffice": "$292,587,330",
    "DVD": "N/A",
    "Response": "True",
}

NO_MATCH = {"Response": "False", "Error": "Movie not found!"}


def _client(session, settings, cache) -> OmdbClient:
    return OmdbClient(session=session, settings=settings, cache=cache)


def test_parse_title_normalizes_fields() -> None:
    record = parse_title(TITLE_PAYLOAD)

    assert record is not None
    assert record.imdb_rating == 8.8
    assert record.ratings == {"imdb": 8.8, "rotten_tomatoes": 87, "metacritic": 74}
    assert record.metascore == 74.0
    assert record.imdb_votes == 2_345_678
    assert record.runtime_minutes == 148
    assert record.actors == ("Leonardo DiCaprio", "Joseph Gordon-Levitt")
    assert record.kind is ContentKind.MOVIE
    assert record.dvd is None


def test_parse_title_treats_not_available_as_missing() -> None:
    record = parse_title({"Title": "Obscure", "imdbRating": "N/A", "Plot": "N/A", "Response": "True"})

    assert record is not None
    assert record.imdb_rating is None
    assert record.plot is None


def test_parse_runtime_minutes() -> None:
    assert parse_runtime_minutes("142 min") == 142
    assert parse_runtime_minutes("N/A") is None
    assert parse_runtime_minutes(None) is None


def test_lookup_by_id_sends_full_plot_request(fake_session, settings, cache) -> None:
    session = fake_session(lambda url, params: (200, TITLE_PAYLOAD))
    client = _client(session, settings, cache)

    record = asyncio.run(client.lookup_by_id("tt1375666"))

    assert record is not None and record.title == "Inception"
    _, params = session.calls[0]
    assert params == {"apikey": "omdb-key", "plot": "full", "r": "json", "i": "tt1375666"}


def test_no_match_is_cached(fake_session, settings, cache) -> None:
    session = fake_session(lambda url, params: (200, NO_MATCH))
    client = _client(session, settings, cache)

    first = asyncio.run(client.lookup_by_title("Nothing", 1999, ContentKind.MOVIE))
    second = asyncio.run(client.lookup_by_title("Nothing", 1999, ContentKind.MOVIE))

    assert first is None and second is None
    assert len(session.calls) == 1
    _, params = session.calls[0]
    assert params["t"] == "Nothing"
    assert params["y"] == "1999"
    assert params["type"] == "movie"


def test_failures_return_none_and_are_not_cached(
    fake_session, settings, cache, no_retry_sleep
) -> None:
    outcomes = iter([(500, {}), (500, {}), (500, {}), (200, TITLE_PAYLOAD)])
    session = fake_session(lambda url, params: next(outcomes))
    client = _client(session, settings, cache)

    assert asyncio.run(client.lookup_by_id("tt1375666")) is None
    assert cache.size() == 0

    record = asyncio.run(client.lookup_by_id("tt1375666"))
    assert record is not None


def test_rate_limit_body_is_retried(fake_session, settings, cache, no_retry_sleep) -> None:
    bodies = iter(
        [{"Response": "False", "Error": "Request limit reached!"}, TITLE_PAYLOAD]
    )
    session = fake_session(lambda url, params: (200, next(bodies)))
    client = _client(session, settings, cache)

    record = asyncio.run(client.lookup_by_id("tt1375666"))

    assert record is not None
    assert no_retry_sleep == [settings.HTTP_RETRY_DELAY_SECONDS]


def test_invalid_key_body_returns_none(fake_session, settings, cache) -> None:
    session = fake_session(
        lambda url, params: (200, {"Response": "False", "Error": "Invalid API key!"})
    )
    client = _client(session, settings, cache)

    assert asyncio.run(client.lookup_by_id("tt1375666")) is None
    assert len(session.calls) == 1
    assert cache.size() == 0


def test_missing_key_skips_requests(fake_session, settings, cache) -> None:
    settings.OMDB_API_KEY = None
    session = fake_session(lambda url, params: (200, TITLE_PAYLOAD))
    client = _client(session, settings, cache)

    assert asyncio.run(client.lookup_by_title("Inception")) is None
    assert session.calls == []


def test_search_returns_hits(fake_session, settings, cache) -> None:
    payload = {
        "Search": [
            {"Title": "Inception", "Year": "2010", "imdbID": "tt1375666", "Type": "movie", "Poster": "N/A"},
            {"Title": "No id"},
        ],
        "Response": "True",
    }
    session = fake_session(lambda url, params: (200, payload))
    client = _client(session, settings, cache)

    hits = asyncio.run(client.search("inception"))

    assert [hit.imdb_id for hit in hits] == ["tt1375666"]
    assert hits[0].poster_url is None
    assert asyncio.run(client.search(" ")) == []
    assert len(session.calls) == 1
