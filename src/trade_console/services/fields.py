"""Field access on loosely-typed records: path resolution, tagging and stringification.

Admin data is frequently partial (a deposit with no linked user, an unset
optional field), so nothing in here raises on absent or malformed values.
"""

from __future__ import annotations

import json
import math
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional, Tuple

from trade_console.config.constants import KIND_DATE, KIND_NUMBER, KIND_STRING, PATH_SEPARATOR
from trade_console.models.core import MISSING, FieldPath, FieldValue

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def split_path(path: FieldPath) -> Tuple[str, ...]:
    """Return the segments of a dotted path string or a segment sequence."""
    if isinstance(path, str):
        return tuple(p for p in path.split(PATH_SEPARATOR) if p)
    return tuple(str(p) for p in path)


def resolve_raw(record: Any, path: FieldPath) -> Any:
    """
    Walk nested mappings along path and return the raw value.

    Returns None when the record or any intermediate node is absent or is not
    a mapping (e.g. userId still a bare id string instead of a populated user).
    """
    node = record
    for segment in split_path(path):
        if not isinstance(node, Mapping):
            return None
        node = node.get(segment)
        if node is None:
            return None
    return node


def resolve(record: Any, path: FieldPath, kind: str = KIND_STRING) -> Any:
    """Resolve path with a neutral default: 0 for numbers, "" otherwise."""
    value = resolve_raw(record, path)
    if value is None:
        return 0 if kind == KIND_NUMBER else ""
    return value


def read_value(record: Any, path: FieldPath) -> FieldValue:
    """Resolve path into a tagged FieldValue (string, number, date or missing)."""
    value = resolve_raw(record, path)
    if value is None:
        return MISSING
    if isinstance(value, bool):
        return FieldValue(KIND_STRING, stringify(value))
    if isinstance(value, (int, float)):
        return FieldValue(KIND_NUMBER, value)
    if isinstance(value, (datetime, date)):
        return FieldValue(KIND_DATE, value)
    return FieldValue(KIND_STRING, stringify(value))


def stringify(value: Any) -> str:
    """
    Canonical string form used by search and export.

    None -> "", booleans -> "true"/"false", integral floats drop the ".0",
    dates -> ISO-8601, nested records and lists -> compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), sort_keys=True, default=str)
    return str(value)


def to_number(value: Any) -> float:
    """Coerce a value to float; non-numeric, NaN and missing values become 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip().replace(",", ""))
        except ValueError:
            return 0.0
    if math.isnan(number):
        return 0.0
    return number


def to_instant(value: Any) -> datetime:
    """
    Coerce a value to an aware UTC datetime.

    Accepts ISO-8601 strings (a trailing "Z" or an offset; naive values are
    taken as UTC), epoch milliseconds, and date/datetime objects. Anything
    else becomes the epoch so missing dates sort first ascending.
    """
    parsed: Optional[datetime] = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(float(value) / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            parsed = None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            parsed = None
    if parsed is None:
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
