from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlencode


@dataclass(frozen=True)
class ItemsRange:
    start: int
    end: int


@dataclass(frozen=True)
class PaginationState:
    page: int
    total_pages: int
    total_results: int
    has_next_page: bool
    has_prev_page: bool
    is_first_page: bool
    is_last_page: bool


def page_window(current: int, total: int, max_visible: int = 5) -> list[int]:
    """
    Page numbers to show around `current`.

    The window holds `min(max_visible, total)` pages, centered on `current`
    and shifted inwards when it would cross page 1 or `total`.
    """
    if total < 1 or max_visible < 1:
        return []
    half = max_visible // 2
    start = max(1, current - half)
    end = min(total, start + max_visible - 1)
    if end - start + 1 < max_visible:
        start = max(1, end - max_visible + 1)
    return list(range(start, end + 1))


def items_range(current: int, per_page: int, total_items: int) -> ItemsRange:
    """1-indexed range of the items shown on `current`."""
    start = (current - 1) * per_page + 1
    end = min(current * per_page, total_items)
    return ItemsRange(start=start, end=end)


def pagination_info(current: int, total: int, total_results: int) -> PaginationState:
    return PaginationState(
        page=current,
        total_pages=total,
        total_results=total_results,
        has_next_page=current < total,
        has_prev_page=current > 1,
        is_first_page=current == 1,
        is_last_page=current == total,
    )


def page_query(page: int, params: Mapping[str, str] | None = None) -> str:
    """Build a shareable query string; page 1 and below mean "no page given"."""
    query = {key: value for key, value in (params or {}).items() if key != "page"}
    if page > 1:
        query["page"] = str(page)
    return urlencode(query)


def page_from_query(raw: object) -> int:
    try:
        page = int(str(raw))
    except (TypeError, ValueError):
        return 1
    return max(1, page)
