"""Tests for payload normalization and local record patches."""

from trade_console.services.collections import (
    as_record_list,
    flatten_account_buckets,
    patch_record,
    record_id,
    remove_record,
    replace_record,
)


def test_record_id_prefers_mongo_id() -> None:
    assert record_id({"_id": "x", "id": "y"}) == "x"
    assert record_id({"id": 7}) == "7"
    assert record_id({}) is None


def test_as_record_list_shapes() -> None:
    assert as_record_list(None) == []
    assert as_record_list([{"a": 1}, "junk", {"a": 2}]) == [{"a": 1}, {"a": 2}]
    assert as_record_list({"data": [{"a": 1}]}) == [{"a": 1}]
    assert as_record_list({"success": True, "data": [{"a": 1}]}) == [{"a": 1}]


def test_as_record_list_keyed_map_uses_values() -> None:
    payload = {"u1": {"name": "a"}, "u2": {"name": "b"}}
    assert as_record_list(payload) == [{"name": "a"}, {"name": "b"}]
    assert as_record_list({"data": payload}) == [{"name": "a"}, {"name": "b"}]


def test_envelope_siblings_are_not_records() -> None:
    payload = {"data": {"u1": {"name": "a"}, "u2": {"name": "b"}}, "stats": {"total": 2}}
    assert as_record_list(payload) == [{"name": "a"}, {"name": "b"}]
    assert as_record_list({"data": [{"a": 1}], "meta": {"page": 1}}) == [{"a": 1}]


def test_as_record_list_nested_key() -> None:
    payload = {"data": {"topReferrers": [{"email": "r@x.com"}], "totalReferrals": 3}}
    assert as_record_list(payload, key="topReferrers") == [{"email": "r@x.com"}]
    assert as_record_list({"data": {}}, key="topReferrers") == []


def test_account_buckets_are_flattened_and_tagged() -> None:
    payload = {"data": {"real": [{"login": 1}], "demo": [{"login": 2}], "archived": []}}
    records = as_record_list(payload)
    assert records == [{"login": 1, "bucket": "real"}, {"login": 2, "bucket": "demo"}]


def test_flatten_keeps_existing_bucket_field() -> None:
    assert flatten_account_buckets({"demo": [{"bucket": "x"}]}) == [{"bucket": "x"}]


def test_patches_return_new_lists() -> None:
    records = [{"_id": "1", "status": "pending"}, {"_id": "2", "status": "pending"}]

    patched = patch_record(records, "1", {"status": "completed"})
    assert patched[0] == {"_id": "1", "status": "completed"}
    assert records[0]["status"] == "pending"
    assert patched[1] is records[1]

    replaced = replace_record(records, {"_id": "2", "status": "failed"})
    assert replaced[1]["status"] == "failed"
    assert records[1]["status"] == "pending"

    assert remove_record(records, "1") == [records[1]]
    assert len(records) == 2
