"""Page slicing and pager helpers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

# Pagers with more pages than this collapse the middle into ellipses.
MAX_VISIBLE_PAGES = 5


@dataclass(frozen=True)
class PageSlice(Generic[T]):
    """One page of a sequence.

    ``start_index`` and ``end_index`` are the 0-based half-open bounds of
    ``items`` within the source sequence, after clipping.
    """

    items: list[T]
    page_count: int
    start_index: int
    end_index: int

    @property
    def first_item(self) -> int:
        """1-based position of the first item on the page, 0 when empty."""
        return self.start_index + 1 if self.items else 0

    @property
    def last_item(self) -> int:
        return self.end_index if self.items else 0


def page_count(total: int, page_size: int) -> int:
    if page_size < 1:
        msg = f"page_size must be positive, got {page_size}"
        raise ValueError(msg)
    return max(1, math.ceil(total / page_size))


def clamp_page(page: int, total: int, page_size: int) -> int:
    """Clamp ``page`` into ``[1, page_count(total, page_size)]``."""
    return min(max(page, 1), page_count(total, page_size))


def paginate(items: Sequence[T], page: int, page_size: int) -> PageSlice[T]:
    """Slice ``items`` to the requested page without clamping ``page``."""
    if page < 1:
        msg = f"page must be >= 1, got {page}"
        raise ValueError(msg)
    count = page_count(len(items), page_size)
    start = min((page - 1) * page_size, len(items))
    end = min(page * page_size, len(items))
    return PageSlice(
        items=list(items[start:end]),
        page_count=count,
        start_index=start,
        end_index=end,
    )


def page_numbers(current: int, total_pages: int) -> list[int | None]:
    """Page links for a pager; ``None`` marks an ellipsis.

    Examples with 10 pages: page 2 -> ``1 2 3 4 … 10``; page 9 ->
    ``1 … 7 8 9 10``; page 5 -> ``1 … 4 5 6 … 10``.
    """
    if total_pages <= MAX_VISIBLE_PAGES:
        return list(range(1, total_pages + 1))
    if current <= 3:
        return [1, 2, 3, 4, None, total_pages]
    if current >= total_pages - 2:
        return [1, None, *range(total_pages - 3, total_pages + 1)]
    return [1, None, current - 1, current, current + 1, None, total_pages]
