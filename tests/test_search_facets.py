"""Tests for free-text search and facet (dropdown) filtering."""

from trade_console.config.constants import ALL
from trade_console.services import facets, search

PATHS = ["firstName", "lastName", "email"]


def test_search_matches_substring_case_insensitive(users) -> None:
    ann = users[0]
    assert search.matches(ann, "smith", PATHS)
    assert search.matches(ann, "SMITH", PATHS)
    assert not search.matches(users[1], "smith", PATHS)


def test_search_empty_query_matches_everything(users) -> None:
    assert all(search.matches(u, "", PATHS) for u in users)
    assert all(search.matches(u, None, PATHS) for u in users)


def test_search_whitespace_is_part_of_the_query() -> None:
    record = {"name": "Smith"}
    assert not search.matches(record, "   ", ["name"])
    assert not search.matches(record, "smith ", ["name"])
    assert search.matches({"name": "Ann Smith"}, "n s", ["name"])


def test_search_is_or_across_paths(users) -> None:
    assert search.matches(users[1], "bob@", PATHS)
    assert search.matches(users[1], "jones", PATHS)


def test_search_stringifies_numbers_and_nested_values() -> None:
    record = {"orderId": 1234, "userId": {"email": "trader@example.com"}}
    assert search.matches(record, "23", ["orderId"])
    assert search.matches(record, "trader", ["userId.email"])


def test_search_missing_field_never_matches() -> None:
    assert not search.matches({"amount": 5}, "x", ["userId.email"])


def test_facet_all_is_noop(users) -> None:
    assert all(facets.matches(u, {"status": ALL}) for u in users)


def test_facet_exact_and_case_sensitive(users) -> None:
    assert facets.matches(users[0], {"status": "active"})
    assert not facets.matches(users[0], {"status": "Active"})
    assert not facets.matches(users[1], {"status": "active"})


def test_facets_are_anded() -> None:
    record = {"status": "completed", "paymentMethod": "crypto"}
    assert facets.matches(record, {"status": "completed", "paymentMethod": "crypto"})
    assert not facets.matches(record, {"status": "completed", "paymentMethod": "card"})


def test_facet_missing_value_never_matches_concrete_value() -> None:
    assert not facets.matches({"status": None}, {"status": "active"})
    assert not facets.matches({}, {"status": "active"})
    assert facets.matches({}, {"status": ALL})


def test_facet_nested_path() -> None:
    record = {"account": {"type": "real"}}
    assert facets.matches(record, {"account.type": "real"})


def test_value_equals_booleans_only_match_booleans() -> None:
    assert facets.value_equals(True, True)
    assert not facets.value_equals(1, True)
    assert not facets.value_equals(True, 1)
    assert facets.value_equals(5, 5.0)
