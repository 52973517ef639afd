"""Type-aware, stable record ordering for sortable column headers."""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Any, Iterable, List

from trade_console.config.constants import KIND_DATE, KIND_NUMBER, KIND_STRING, SORT_DESC
from trade_console.models.core import FieldValue, Record, SortConfig
from trade_console.services.fields import EPOCH, read_value, stringify, to_instant, to_number

logger = logging.getLogger(__name__)


def sort_key(value: FieldValue, kind: str) -> Any:
    """
    Map a tagged field value to a comparable key for the declared kind.

    Missing values take the kind's neutral value (0, the epoch, or "") so they
    sort deterministically instead of raising.
    """
    if kind == KIND_NUMBER:
        return 0.0 if value.is_missing else to_number(value.data)
    if kind == KIND_DATE:
        return EPOCH if value.is_missing else to_instant(value.data)
    if kind != KIND_STRING:
        logger.warning("Unknown sort kind %r, comparing as string", kind)
    if value.is_missing:
        return ""
    return stringify(value.data).lower()


def _cmp(left: Any, right: Any) -> int:
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def compare(a: Record, b: Record, sort: SortConfig) -> int:
    """
    Compare two records under sort; returns -1, 0 or 1.

    With no sort field every pair compares equal. Descending negates the
    ascending result, so equal keys stay 0 in both directions.
    """
    if sort.field is None:
        return 0
    result = _cmp(
        sort_key(read_value(a, sort.field), sort.kind),
        sort_key(read_value(b, sort.field), sort.kind),
    )
    return -result if sort.direction == SORT_DESC else result


def sort_records(records: Iterable[Record], sort: SortConfig) -> List[Record]:
    """Return a new list ordered by sort; ties keep their upstream order."""
    items = list(records)
    if sort.field is None:
        return items
    keyed = [(sort_key(read_value(r, sort.field), sort.kind), r) for r in items]
    sign = -1 if sort.direction == SORT_DESC else 1
    keyed.sort(key=cmp_to_key(lambda x, y: sign * _cmp(x[0], y[0])))
    return [r for _, r in keyed]
