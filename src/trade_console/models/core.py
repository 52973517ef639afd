"""Typed structures for the tabular view engine (configuration and results)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypedDict, Union

from trade_console.config.constants import ALL, DEFAULT_PAGE_SIZE, KIND_STRING, SORT_ASC

Record = Dict[str, Any]
FieldPath = Union[str, Sequence[str]]


@dataclass(frozen=True)
class FieldValue:
    """Tagged result of resolving a field path: string, number, date or missing."""

    tag: str
    data: Any = None

    @property
    def is_missing(self) -> bool:
        return self.tag == "missing"


MISSING = FieldValue("missing")


@dataclass(frozen=True)
class FilterConfig:
    """Free-text query plus facet selections (value ALL means no constraint)."""

    query: str = ""
    facets: Mapping[Any, Any] = field(default_factory=dict)

    def with_query(self, query: str) -> "FilterConfig":
        return FilterConfig(query=query or "", facets=dict(self.facets))

    def with_facet(self, path: FieldPath, value: Any) -> "FilterConfig":
        facets = dict(self.facets)
        facets[path] = value
        return FilterConfig(query=self.query, facets=facets)

    @property
    def is_empty(self) -> bool:
        return self.query == "" and all(v == ALL for v in self.facets.values())


@dataclass(frozen=True)
class SortConfig:
    """Active sort column; field None keeps upstream order."""

    field: Optional[FieldPath] = None
    direction: str = SORT_ASC
    kind: str = KIND_STRING


@dataclass(frozen=True)
class PageConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    current_page: int = 1


@dataclass(frozen=True)
class ExportColumn:
    header: str
    path: FieldPath


ExportSpec = Sequence[ExportColumn]


class PageResult(TypedDict):
    """Output of paginate()."""

    visible_rows: List[Record]
    total_pages: int
    current_page: int
    start_index: int
    end_index: int


class ViewResult(TypedDict):
    """Derived view of one list screen as returned by ViewEngine.result."""

    visible_rows: List[Record]
    filtered_sorted_count: int
    total_count: int
    total_pages: int
    current_page: int
    start_index: int
    end_index: int


class TransactionStats(TypedDict):
    """Summary card numbers for deposits and withdrawals."""

    total: int
    completed: int
    completed_amount: float
    pending: int


class TradingStats(TypedDict, total=False):
    """Summary card numbers for the orders and trades screens."""

    total_orders: int
    executed_orders: int
    pending_orders: int
    total_order_volume: float
    total_trades: int
    open_trades: int
    closed_trades: int
    total_trade_volume: float
    total_profit_loss: float
    avg_spread: float
    winning_trades: int
    losing_trades: int
