from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageSlice(Generic[T]):
    """
    One page of a result set.

    - rows: the rows in [start, end)
    - page: the page actually shown, after clamping
    - total_pages: at least 1, even for an empty result set
    """
    rows: Sequence[T]
    page: int
    total_pages: int
    start: int
    end: int


def total_pages(n_rows: int, page_size: int) -> int:
    return max(1, math.ceil(n_rows / max(1, page_size)))


def clamp_page(page: int, n_rows: int, page_size: int) -> int:
    """Pull the page back into [1, total_pages]; a shrinking result set clamps, it does not reset."""
    return min(max(1, int(page)), total_pages(n_rows, page_size))


def page_bounds(n_rows: int, page_size: int, page: int) -> Tuple[int, int, int, int]:
    """
    :return: (clamped page, total pages, start, end) with end truncated at n_rows
    """
    page_size = max(1, page_size)
    pages = total_pages(n_rows, page_size)
    page = clamp_page(page, n_rows, page_size)
    start = (page - 1) * page_size
    end = min(start + page_size, n_rows)
    return page, pages, start, end


def paginate(rows: Sequence[T], page_size: int, page: int) -> PageSlice[T]:
    page, pages, start, end = page_bounds(len(rows), page_size, page)
    return PageSlice(rows=rows[start:end], page=page, total_pages=pages, start=start, end=end)


def row_range_label(n_rows: int, start: int, end: int) -> str:
    """Status text such as 'Rows 6-7 of 7'."""
    first = start + 1 if n_rows else 0
    return f"Rows {first}-{end} of {n_rows}"
