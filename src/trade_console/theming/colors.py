"""Color and font constants shared by the UI and its GUI-free helpers."""

from __future__ import annotations

CONSOLE_FONT_FAMILY = "SF Pro Display"  # Primary font, falls back to system default
CONSOLE_FONT_DEFAULT = ("SF Pro Display", 12)  # Tuple so Tk doesn't parse family as "SF", size "Pro"
CONSOLE_FONT_TABLE = ("SF Pro Display", 11)
CONSOLE_FONT_TITLE = ("SF Pro Display", 16, "bold")

COLOR_PROFIT = "#30D158"  # Green
COLOR_LOSS = "#FF3B30"    # Red
COLOR_NEUTRAL = "#888888"  # Gray for captions and zero values
