"""Facet (dropdown) filters: exact, case-sensitive equality on closed value sets."""

from __future__ import annotations

from typing import Any, Mapping

from trade_console.config.constants import ALL
from trade_console.services.fields import resolve_raw


def value_equals(actual: Any, expected: Any) -> bool:
    """Exact equality where booleans only ever equal booleans."""
    if actual is None:
        return False
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual is expected
    return actual == expected


def matches(record: Any, facets: Mapping[Any, Any]) -> bool:
    """Return True if the record satisfies every facet not set to ALL."""
    for path, expected in facets.items():
        if expected == ALL:
            continue
        if not value_equals(resolve_raw(record, path), expected):
            return False
    return True
