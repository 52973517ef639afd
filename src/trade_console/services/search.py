"""Free-text search across several record fields ("search anywhere")."""

from __future__ import annotations

from typing import Any, Sequence

from trade_console.models.core import FieldPath
from trade_console.services.fields import resolve_raw, stringify


def matches(record: Any, query: str, paths: Sequence[FieldPath]) -> bool:
    """
    Return True if query is a case-insensitive substring of any field in paths.

    Only an empty query matches every record; whitespace is part of the
    substring. Missing fields never match a non-empty query.
    """
    needle = (query or "").lower()
    if needle == "":
        return True
    for path in paths:
        value = resolve_raw(record, path)
        if value is None:
            continue
        if needle in stringify(value).lower():
            return True
    return False
