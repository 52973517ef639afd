"""Shared UI utilities: value colors and cell formatting (no GUI deps)."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from trade_console.config.constants import KIND_DATE, KIND_NUMBER
from trade_console.services.fields import resolve_raw, stringify, to_instant, to_number
from trade_console.theming.colors import COLOR_LOSS, COLOR_NEUTRAL, COLOR_PROFIT


def color_for_value(value: Optional[float]) -> str:
    """
    Return foreground color for a numeric value (P&L, amount, etc.).
    The list screens use it to tag whole rows by their P&L column.

    Returns:
        COLOR_PROFIT if value > 0, COLOR_LOSS if value < 0,
        COLOR_NEUTRAL if value is None, non-numeric or exactly zero.
    """
    if value is None:
        return COLOR_NEUTRAL
    try:
        v = float(value)
    except (TypeError, ValueError):
        return COLOR_NEUTRAL
    if abs(v) < 1e-9:
        return COLOR_NEUTRAL
    return COLOR_PROFIT if v > 0 else COLOR_LOSS


def format_cell(value: Any, kind: str) -> str:
    """Display text for one table cell: money-style numbers, date-only timestamps."""
    if value is None or value == "":
        return "—"
    if kind == KIND_NUMBER:
        number = to_number(value)
        if number.is_integer() and not isinstance(value, str):
            return f"{int(number):,}"
        return f"{number:,.2f}"
    if kind == KIND_DATE:
        instant = to_instant(value)
        return instant.strftime("%Y-%m-%d %H:%M")
    return stringify(value)


def page_caption(start_index: int, end_index: int, total: int) -> str:
    """Pager caption such as "11-20 of 23"; "0 of 0" for an empty view."""
    if total == 0:
        return "0 of 0"
    return f"{start_index + 1}-{end_index} of {total}"


def stats_caption(stats: Dict[str, Any]) -> str:
    """One-line summary strip, e.g. "Total: 3   Completed amount: 17.00   By status: active 2, pending 1"."""
    parts = []
    for key, value in stats.items():
        label = key.replace("_", " ").capitalize()
        if isinstance(value, dict):
            text = ", ".join(f"{name or '—'} {count}" for name, count in value.items()) or "—"
        elif isinstance(value, float):
            text = f"{value:,.2f}"
        elif isinstance(value, int):
            text = f"{value:,}"
        else:
            text = stringify(value)
        parts.append(f"{label}: {text}")
    return "   ".join(parts)


def pnl_row_tag(record: Dict[str, Any], paths: Sequence[str]) -> Optional[str]:
    """Row tag from the first P&L field present: "profit", "loss" or None."""
    for path in paths:
        value = resolve_raw(record, path)
        if value is None:
            continue
        color = color_for_value(to_number(value))
        if color == COLOR_PROFIT:
            return "profit"
        if color == COLOR_LOSS:
            return "loss"
    return None
