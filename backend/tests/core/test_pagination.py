import pytest

from movieworld.core.pagination import (
    ItemsRange,
    items_range,
    page_from_query,
    page_query,
    page_window,
    pagination_info,
)


@pytest.mark.parametrize(
    "current, total, expected",
    [
        (50, 100, [48, 49, 50, 51, 52]),
        (1, 100, [1, 2, 3, 4, 5]),
        (2, 3, [1, 2, 3]),
        (3, 3, [1, 2, 3]),
        (100, 100, [96, 97, 98, 99, 100]),
        (99, 100, [96, 97, 98, 99, 100]),
        (1, 1, [1]),
        (1, 0, []),
    ],
)
def test_page_window(current: int, total: int, expected: list[int]) -> None:
    assert page_window(current, total) == expected


def test_page_window_respects_max_visible() -> None:
    assert page_window(10, 20, max_visible=3) == [9, 10, 11]
    assert page_window(10, 20, max_visible=4) == [8, 9, 10, 11]


def test_items_range_on_the_last_partial_page() -> None:
    assert items_range(3, 20, 45) == ItemsRange(start=41, end=45)
    assert items_range(1, 20, 45) == ItemsRange(start=1, end=20)


def test_pagination_info_flags() -> None:
    first = pagination_info(1, 3, 60)
    assert first.is_first_page and not first.has_prev_page and first.has_next_page

    last = pagination_info(3, 3, 60)
    assert last.is_last_page and last.has_prev_page and not last.has_next_page

    only = pagination_info(1, 1, 5)
    assert only.is_first_page and only.is_last_page


def test_page_query_drops_first_page() -> None:
    assert page_query(1, {"query": "dune"}) == "query=dune"
    assert page_query(3, {"query": "dune", "page": "9"}) == "query=dune&page=3"
    assert page_query(0) == ""


@pytest.mark.parametrize(
    "raw, expected", [("4", 4), ("0", 1), ("-2", 1), ("abc", 1), (None, 1), (7, 7)]
)
def test_page_from_query(raw: object, expected: int) -> None:
    assert page_from_query(raw) == expected
