"""Tests for field resolution, value tagging and coercion."""

from datetime import date, datetime, timezone

from trade_console.config.constants import KIND_DATE, KIND_NUMBER, KIND_STRING
from trade_console.models.core import MISSING
from trade_console.services.fields import (
    EPOCH,
    read_value,
    resolve,
    resolve_raw,
    split_path,
    stringify,
    to_instant,
    to_number,
)


def test_split_path_accepts_dotted_string_and_segments() -> None:
    assert split_path("userId.email") == ("userId", "email")
    assert split_path(["userId", "email"]) == ("userId", "email")
    assert split_path("status") == ("status",)


def test_resolve_nested_value() -> None:
    record = {"userId": {"email": "a@b.com", "firstName": "Ann"}}
    assert resolve(record, "userId.email") == "a@b.com"
    assert resolve(record, ["userId", "firstName"]) == "Ann"


def test_resolve_missing_intermediate_returns_neutral_default() -> None:
    """A deposit with no linked user resolves to "" or 0 instead of raising."""
    deposit = {"amount": "10.00"}
    assert resolve(deposit, "userId.email") == ""
    assert resolve(deposit, "userId.balance", KIND_NUMBER) == 0
    assert resolve({"userId": None}, "userId.email") == ""


def test_resolve_through_unpopulated_reference() -> None:
    """userId can still be a bare id string instead of an embedded user."""
    assert resolve_raw({"userId": "abc123"}, "userId.email") is None


def test_resolve_keeps_falsy_values() -> None:
    record = {"balance": 0, "isActive": False, "name": ""}
    assert resolve(record, "balance", KIND_NUMBER) == 0
    assert resolve_raw(record, "isActive") is False
    assert resolve(record, "name") == ""


def test_read_value_tags() -> None:
    record = {"n": 3, "s": "x", "b": True, "d": date(2024, 1, 2), "none": None}
    assert read_value(record, "n").tag == KIND_NUMBER
    assert read_value(record, "s").tag == KIND_STRING
    assert read_value(record, "b").data == "true"
    assert read_value(record, "d").tag == KIND_DATE
    assert read_value(record, "none") is MISSING
    assert read_value(record, "absent").is_missing


def test_stringify() -> None:
    assert stringify(None) == ""
    assert stringify(True) == "true"
    assert stringify(False) == "false"
    assert stringify(42) == "42"
    assert stringify(10.0) == "10"
    assert stringify(2.5) == "2.5"
    assert stringify("10.00") == "10.00"
    assert stringify(date(2024, 5, 1)) == "2024-05-01"
    assert stringify({"b": 1, "a": 2}) == '{"a":2,"b":1}'


def test_to_number() -> None:
    assert to_number("10.00") == 10.0
    assert to_number("1,250.75") == 1250.75
    assert to_number(3) == 3.0
    assert to_number(None) == 0.0
    assert to_number("abc") == 0.0
    assert to_number(float("nan")) == 0.0
    assert to_number(True) == 0.0


def test_to_instant_parses_iso_and_epoch_millis() -> None:
    assert to_instant("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert to_instant("2024-03-01") == datetime(2024, 3, 1, tzinfo=timezone.utc)
    assert to_instant(0) == EPOCH
    assert to_instant(86_400_000) == datetime(1970, 1, 2, tzinfo=timezone.utc)


def test_to_instant_unparsable_is_epoch() -> None:
    assert to_instant(None) == EPOCH
    assert to_instant("") == EPOCH
    assert to_instant("not a date") == EPOCH
