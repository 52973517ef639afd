"""Collection adapters at the API boundary: payload shapes and local patches.

The view engine only ever receives a list of records. Whatever shape the
backend answers with (envelope, keyed map, per-kind buckets) is turned into
a list here, and local create/update/delete acknowledgements produce a new
list for the caller to hand back to the engine.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from trade_console.config.constants import ACCOUNT_BUCKETS
from trade_console.models.core import Record


def record_id(record: Mapping[str, Any]) -> Optional[str]:
    """Return the record's identifier (Mongo-style _id first, then id)."""
    rid = record.get("_id") or record.get("id")
    return str(rid) if rid is not None else None


def _records_only(items: Iterable[Any]) -> List[Record]:
    return [item for item in items if isinstance(item, Mapping)]


def as_record_list(payload: Any, key: Optional[str] = None) -> List[Record]:
    """
    Normalize an API payload into a list of records.

    Accepts a list, a {"data": ...} envelope, a keyed map of records (its
    values are used, in insertion order) or None. When key is given, the list
    is read from that entry of the (unwrapped) payload, e.g. "topReferrers".
    A top-level "data" key is always the envelope, so sibling entries such
    as summary stats never come back as records. Non-mapping items are dropped.
    """
    if payload is None:
        return []
    if isinstance(payload, Mapping) and "data" in payload:
        payload = payload.get("data")
    if key is not None:
        payload = payload.get(key) if isinstance(payload, Mapping) else None
        if payload is None:
            return []
    if isinstance(payload, list):
        return _records_only(payload)
    if isinstance(payload, Mapping):
        if payload and all(isinstance(v, list) for v in payload.values()) and set(payload) <= set(ACCOUNT_BUCKETS):
            return flatten_account_buckets(payload)
        return _records_only(payload.values())
    return []


def flatten_account_buckets(payload: Mapping[str, Any]) -> List[Record]:
    """Flatten {"real": [...], "demo": [...], "archived": [...]} into one tagged list."""
    out: List[Record] = []
    for bucket in ACCOUNT_BUCKETS:
        for item in payload.get(bucket) or []:
            if isinstance(item, Mapping):
                tagged: Dict[str, Any] = dict(item)
                tagged.setdefault("bucket", bucket)
                out.append(tagged)
    return out


def replace_record(records: Iterable[Record], new_record: Record) -> List[Record]:
    """Return a new list with the record sharing new_record's id swapped in."""
    target = record_id(new_record)
    return [new_record if record_id(r) == target else r for r in records]


def patch_record(records: Iterable[Record], rid: str, changes: Mapping[str, Any]) -> List[Record]:
    """Return a new list where record rid has changes merged into a copy of it."""
    out: List[Record] = []
    for r in records:
        if record_id(r) == rid:
            merged = dict(r)
            merged.update(changes)
            out.append(merged)
        else:
            out.append(r)
    return out


def remove_record(records: Iterable[Record], rid: str) -> List[Record]:
    """Return a new list without record rid."""
    return [r for r in records if record_id(r) != rid]
