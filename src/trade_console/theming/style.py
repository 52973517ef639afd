"""Centralized theming and typography for the Trade Console UI."""

from __future__ import annotations

import tkinter as tk
import ttkbootstrap as tb

from trade_console.theming.colors import CONSOLE_FONT_FAMILY, CONSOLE_FONT_TABLE

THEME_NAME = "darkly"

SPACING_SMALL = 4
SPACING_MEDIUM = 8
SPACING_LARGE = 16
PADDING = 16

TABLE_ROW_HEIGHT = 26
SEARCH_ENTRY_WIDTH = 32
FACET_COMBO_WIDTH = 18


def setup_styles(root: tk.Misc) -> tb.Style:
    """Configure ttk/ttkbootstrap styles for the list screens.

    ttkbootstrap.Style is a singleton and does not take master; root is kept
    for API compatibility with callers.
    """
    style = tb.Style()
    style.configure("Vertical.TScrollbar", gripcount=0, width=8, arrowsize=0)
    style.configure("Horizontal.TScrollbar", gripcount=0, width=8, arrowsize=0)
    try:
        style.configure("TButton", padding=(14, 8))
        style.configure("Pager.TButton", padding=(8, 4))
        style.configure("Console.Treeview", font=CONSOLE_FONT_TABLE, rowheight=TABLE_ROW_HEIGHT)
        style.configure("Console.Treeview.Heading", font=(CONSOLE_FONT_FAMILY, 11, "bold"))
    except tk.TclError:
        # Some environments may not support style reconfiguration; fail gracefully.
        pass
    return style
