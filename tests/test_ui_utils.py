"""Tests for UI helpers (no GUI deps)."""

from trade_console.config.constants import KIND_DATE, KIND_NUMBER, KIND_STRING
from trade_console.theming.colors import COLOR_LOSS, COLOR_NEUTRAL, COLOR_PROFIT
from trade_console.ui.utils import color_for_value, format_cell, page_caption, pnl_row_tag, stats_caption


def test_color_for_value_positive() -> None:
    assert color_for_value(1.0) == COLOR_PROFIT
    assert color_for_value("12.5") == COLOR_PROFIT


def test_color_for_value_negative() -> None:
    assert color_for_value(-0.01) == COLOR_LOSS


def test_color_for_value_zero_none_and_text() -> None:
    assert color_for_value(0) == COLOR_NEUTRAL
    assert color_for_value(None) == COLOR_NEUTRAL
    assert color_for_value("n/a") == COLOR_NEUTRAL


def test_format_cell_numbers() -> None:
    assert format_cell(1234, KIND_NUMBER) == "1,234"
    assert format_cell("1234.5", KIND_NUMBER) == "1,234.50"
    assert format_cell(2.5, KIND_NUMBER) == "2.50"


def test_format_cell_dates_and_strings() -> None:
    assert format_cell("2024-05-01T10:30:00Z", KIND_DATE) == "2024-05-01 10:30"
    assert format_cell(True, KIND_STRING) == "true"
    assert format_cell(None, KIND_STRING) == "—"
    assert format_cell("", KIND_NUMBER) == "—"


def test_page_caption() -> None:
    assert page_caption(0, 0, 0) == "0 of 0"
    assert page_caption(10, 20, 23) == "11-20 of 23"
    assert page_caption(20, 23, 23) == "21-23 of 23"


def test_stats_caption() -> None:
    caption = stats_caption({"total": 1200, "completed_amount": 17.0, "by_status": {"active": 2, "": 1}})
    assert caption == "Total: 1,200   Completed amount: 17.00   By status: active 2, — 1"
    assert stats_caption({}) == ""


def test_pnl_row_tag() -> None:
    paths = ("profitLoss", "totalProfitLoss")
    assert pnl_row_tag({"profitLoss": "25.5"}, paths) == "profit"
    assert pnl_row_tag({"totalProfitLoss": -3}, paths) == "loss"
    assert pnl_row_tag({"profitLoss": 0, "totalProfitLoss": 4}, paths) == "profit"
    assert pnl_row_tag({"profitLoss": "n/a"}, paths) is None
    assert pnl_row_tag({}, paths) is None
