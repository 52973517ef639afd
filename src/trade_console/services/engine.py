"""ViewEngine: filter -> sort -> paginate over one screen's in-memory collection.

Every configuration change runs the whole pipeline synchronously and swaps
the ViewResult in one assignment. There is no incremental update path: a
refetch or a local edit is handed in as a replacement collection.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from trade_console.config.constants import (
    ALL,
    KIND_STRING,
    PAGE_SIZE_OPTIONS,
    SORT_ASC,
    SORT_DESC,
    SORT_DIRECTIONS,
    VALUE_KINDS,
)
from trade_console.models.core import (
    ExportSpec,
    FieldPath,
    FilterConfig,
    PageConfig,
    Record,
    SortConfig,
    ViewResult,
)
from trade_console.services import export as exporter
from trade_console.services import facets as facet_filter
from trade_console.services import search
from trade_console.services.paging import paginate
from trade_console.services.sorting import sort_records

logger = logging.getLogger(__name__)


def filter_records(
    records: Iterable[Record],
    filters: FilterConfig,
    search_paths: Sequence[FieldPath],
) -> List[Record]:
    """Keep records matching the search box AND every facet; order is preserved."""
    return [
        r for r in records
        if facet_filter.matches(r, filters.facets) and search.matches(r, filters.query, search_paths)
    ]


class ViewEngine:
    """
    Derived table view for one list screen.

    Args:
        search_paths: Fields the free-text search looks in (OR across fields).
        records: Initial collection (already fetched; never mutated here).
        filters: Initial query/facets. Facets not listed behave as ALL.
        sort: Initial sort column; field None keeps fetch order.
        page: Initial page size and page.
    """

    def __init__(
        self,
        search_paths: Sequence[FieldPath] = (),
        records: Iterable[Record] = (),
        filters: Optional[FilterConfig] = None,
        sort: Optional[SortConfig] = None,
        page: Optional[PageConfig] = None,
    ) -> None:
        self._search_paths: Tuple[FieldPath, ...] = tuple(search_paths)
        self._records: Tuple[Record, ...] = tuple(records)
        self._filters = filters or FilterConfig()
        self._sort = _checked_sort(sort or SortConfig())
        self._page = page or PageConfig()
        self._filtered_sorted: Tuple[Record, ...] = ()
        self._result: ViewResult = _empty_result()
        self._recompute()

    # --- read-only state ---

    @property
    def result(self) -> ViewResult:
        return self._result

    @property
    def filtered_sorted(self) -> Tuple[Record, ...]:
        """The full filtered and sorted sequence (what an export contains)."""
        return self._filtered_sorted

    @property
    def collection(self) -> Tuple[Record, ...]:
        return self._records

    @property
    def filters(self) -> FilterConfig:
        return self._filters

    @property
    def sort(self) -> SortConfig:
        return self._sort

    @property
    def page(self) -> PageConfig:
        """Page configuration with current_page already clamped."""
        return self._page

    @property
    def search_paths(self) -> Tuple[FieldPath, ...]:
        return self._search_paths

    # --- the single transition ---

    def reconfigure(
        self,
        collection: Optional[Iterable[Record]] = None,
        filters: Optional[FilterConfig] = None,
        sort: Optional[SortConfig] = None,
        page: Optional[PageConfig] = None,
    ) -> ViewResult:
        """
        Replace any of the inputs and recompute the view.

        A page given here is taken as-is (then clamped); the page-1 resets of
        set_query/set_facet/set_page_size are applied by those helpers.
        """
        if collection is not None:
            self._records = tuple(collection)
        if filters is not None:
            self._filters = filters
        if sort is not None:
            self._sort = _checked_sort(sort)
        if page is not None:
            self._page = page
        return self._recompute()

    # --- collection ---

    def set_collection(self, records: Iterable[Record]) -> ViewResult:
        """Swap in a refetched or locally patched collection; the page is kept but clamped."""
        return self.reconfigure(collection=records)

    # --- filtering ---

    def set_query(self, query: str) -> ViewResult:
        return self.reconfigure(filters=self._filters.with_query(query), page=self._first_page())

    def set_facet(self, path: FieldPath, value: Any) -> ViewResult:
        return self.reconfigure(filters=self._filters.with_facet(path, value), page=self._first_page())

    def clear_filters(self) -> ViewResult:
        cleared = FilterConfig(query="", facets={path: ALL for path in self._filters.facets})
        return self.reconfigure(filters=cleared, page=self._first_page())

    # --- sorting ---

    def set_sort(self, field: Optional[FieldPath], direction: str = SORT_ASC, kind: str = KIND_STRING) -> ViewResult:
        return self.reconfigure(sort=SortConfig(field=field, direction=direction, kind=kind))

    def toggle_sort(self, field: FieldPath, kind: str = KIND_STRING) -> ViewResult:
        """Column header click: a new column sorts ascending, the active one flips direction."""
        if self._sort.field == field:
            direction = SORT_ASC if self._sort.direction == SORT_DESC else SORT_DESC
        else:
            direction = SORT_ASC
        return self.set_sort(field, direction, kind)

    # --- paging ---

    def set_page(self, page: int) -> ViewResult:
        return self.reconfigure(page=replace(self._page, current_page=page))

    def next_page(self) -> ViewResult:
        return self.set_page(self._page.current_page + 1)

    def previous_page(self) -> ViewResult:
        return self.set_page(self._page.current_page - 1)

    def first_page(self) -> ViewResult:
        return self.set_page(1)

    def last_page(self) -> ViewResult:
        return self.set_page(self._result["total_pages"])

    def set_page_size(self, page_size: int) -> ViewResult:
        """Change rows per page; always returns to page 1."""
        if page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {PAGE_SIZE_OPTIONS}, got {page_size!r}")
        return self.reconfigure(page=PageConfig(page_size=page_size, current_page=1))

    # --- export ---

    def export(self, spec: ExportSpec) -> List[List[str]]:
        """Rows for every record matching the current filters, in sort order."""
        return exporter.export_rows(self._filtered_sorted, spec)

    # --- internals ---

    def _first_page(self) -> PageConfig:
        return replace(self._page, current_page=1)

    def _recompute(self) -> ViewResult:
        filtered = filter_records(self._records, self._filters, self._search_paths)
        ordered = sort_records(filtered, self._sort)
        paged = paginate(ordered, self._page)
        if paged["current_page"] != self._page.current_page:
            logger.debug("Clamped page %s -> %s", self._page.current_page, paged["current_page"])
            self._page = replace(self._page, current_page=paged["current_page"])
        self._filtered_sorted = tuple(ordered)
        self._result = {
            "visible_rows": paged["visible_rows"],
            "filtered_sorted_count": len(ordered),
            "total_count": len(self._records),
            "total_pages": paged["total_pages"],
            "current_page": paged["current_page"],
            "start_index": paged["start_index"],
            "end_index": paged["end_index"],
        }
        logger.debug(
            "Recomputed view: %d/%d rows, page %d/%d",
            len(ordered), len(self._records), paged["current_page"], paged["total_pages"],
        )
        return self._result


def _checked_sort(sort: SortConfig) -> SortConfig:
    if sort.direction not in SORT_DIRECTIONS:
        raise ValueError(f"direction must be one of {SORT_DIRECTIONS}, got {sort.direction!r}")
    if sort.kind not in VALUE_KINDS:
        raise ValueError(f"kind must be one of {VALUE_KINDS}, got {sort.kind!r}")
    return sort


def _empty_result() -> ViewResult:
    return {
        "visible_rows": [],
        "filtered_sorted_count": 0,
        "total_count": 0,
        "total_pages": 1,
        "current_page": 1,
        "start_index": 0,
        "end_index": 0,
    }
