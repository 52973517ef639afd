"""Page windowing over an ordered sequence of records."""

from __future__ import annotations

import math
from typing import Sequence

from trade_console.models.core import PageConfig, PageResult, Record


def total_pages_for(count: int, page_size: int) -> int:
    """Number of pages for count rows; an empty sequence still has page 1 of 1."""
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a requested 1-based page into [1, total_pages]."""
    return min(max(1, int(page)), max(1, total_pages))


def paginate(sequence: Sequence[Record], page: PageConfig) -> PageResult:
    """
    Slice the visible page out of sequence.

    current_page is clamped against the page count of this sequence on every
    call, so a sequence that shrank under a large page yields its last page
    rather than an empty one.

    Raises:
        ValueError: if page_size is not a positive integer.
    """
    size = page.page_size
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError(f"page_size must be a positive integer, got {size!r}")
    total_pages = total_pages_for(len(sequence), size)
    current = clamp_page(page.current_page, total_pages)
    start = (current - 1) * size
    end = min(start + size, len(sequence))
    return {
        "visible_rows": list(sequence[start:end]),
        "total_pages": total_pages,
        "current_page": current,
        "start_index": start,
        "end_index": end,
    }
