"""Tests for app core API (list_screens, build_screen, export_screen) and screen definitions."""

import io
from unittest.mock import MagicMock

import pytest

from trade_console.app import build_screen, export_screen, list_screens, refresh_screens
from trade_console.config.constants import ALL, PAGE_SIZE_OPTIONS
from trade_console.config.screens import SCREENS, get_screen, trading_status
from trade_console.services.api import ApiError, AuthenticationError


def test_list_screens_in_navigation_order() -> None:
    keys = list_screens()
    assert keys[0] == "users"
    assert set(keys) == {
        "users", "accounts", "account_types", "deposits", "withdrawals", "orders", "trades", "referrals",
    }


def test_get_screen_unknown_key() -> None:
    with pytest.raises(KeyError):
        get_screen("nope")


@pytest.mark.parametrize("key", sorted(SCREENS))
def test_screen_definitions_are_consistent(key) -> None:
    screen = SCREENS[key]
    assert screen.endpoint.startswith("/")
    assert screen.search_paths
    assert screen.columns
    assert screen.export
    for facet in screen.facets:
        choices = facet.choices()
        assert choices[0][1] == ALL
        assert len(choices) == len(facet.options) + 1


def test_export_entity_names() -> None:
    assert get_screen("account_types").export_entity == "account-types"
    assert get_screen("deposits").export_entity == "deposits"


def test_trading_status() -> None:
    assert trading_status({"totalTrades": 0}) == "no_trades"
    assert trading_status({"totalTrades": 4, "isProfitable": True}) == "profitable"
    assert trading_status({"totalTrades": 4, "isProfitable": False}) == "losing"
    assert trading_status({}) is None


def test_build_screen_uses_given_client() -> None:
    client = MagicMock()
    screen = build_screen("orders", client)
    assert screen.client is client
    assert screen.engine.page.page_size in PAGE_SIZE_OPTIONS


def test_export_screen_fetches_then_writes() -> None:
    client = MagicMock()
    client.fetch_collection.return_value = [
        {"firstName": "Ann", "lastName": "Lee", "email": "ann@x.com", "totalReferrals": 2, "referralEarnings": 10},
    ]
    buf = io.StringIO()

    assert export_screen("referrals", buf, client) == 1

    client.fetch_collection.assert_called_once_with("/refer/admin/stats", params=None, key="topReferrers")
    assert buf.getvalue().splitlines()[1] == "Ann,Lee,ann@x.com,2,10"


def test_refresh_screens_collects_failures() -> None:
    client = MagicMock()
    client.fetch_collection.side_effect = [[{"_id": "o1"}], ApiError("down", 503), [{"_id": "r1"}]]
    screens = [build_screen(key, client) for key in ("orders", "trades", "referrals")]

    errors = refresh_screens(screens)

    assert list(errors) == ["trades"]
    assert errors["trades"].status_code == 503
    assert screens[0].result["total_count"] == 1
    assert screens[2].result["total_count"] == 1


def test_refresh_screens_stops_at_first_401() -> None:
    client = MagicMock()
    client.fetch_collection.side_effect = AuthenticationError("jwt expired", 401)
    screens = [build_screen(key, client) for key in ("orders", "trades", "referrals")]

    with pytest.raises(AuthenticationError):
        refresh_screens(screens)

    assert client.fetch_collection.call_count == 1
