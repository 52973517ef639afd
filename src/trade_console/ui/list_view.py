"""List screen widget: search box, facet dropdowns, sortable table, pager and CSV download."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Dict, List, Optional, Tuple

import ttkbootstrap as tb
from ttkbootstrap.constants import PRIMARY, SECONDARY

from trade_console.config.constants import KIND_NUMBER, PAGE_SIZE_OPTIONS, SORT_ASC
from trade_console.services.api import ApiError, AuthenticationError
from trade_console.services.fields import resolve_raw
from trade_console.services.screen import ListScreen
from trade_console.theming.colors import COLOR_LOSS, COLOR_NEUTRAL, COLOR_PROFIT, CONSOLE_FONT_DEFAULT
from trade_console.theming.style import FACET_COMBO_WIDTH, PADDING, SEARCH_ENTRY_WIDTH, SPACING_MEDIUM, SPACING_SMALL
from trade_console.ui import dialogs as ui_dialogs
from trade_console.ui.utils import format_cell, page_caption, pnl_row_tag, stats_caption

logger = logging.getLogger(__name__)

# Columns whose sign drives a row tag (profit green / loss red)
PNL_PATHS = ("profitLoss", "totalProfitLoss")


class ListScreenFrame(tb.Frame):
    """
    One notebook tab rendering a ListScreen's current ViewResult.

    on_auth_error is called instead of showing an error box when a refresh
    is rejected with 401, so the window can prompt for sign-in once.
    """

    def __init__(
        self,
        master: tk.Misc,
        screen: ListScreen,
        on_auth_error: Optional[Callable[[AuthenticationError], None]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(master, padding=PADDING, **kwargs)
        self.screen = screen
        self.on_auth_error = on_auth_error
        self.screen_config = screen.config
        self._facet_vars: Dict[str, Tuple[tb.StringVar, List[Tuple[str, Any]]]] = {}
        self._build_toolbar()
        self._build_table()
        self._build_pager()
        self.render()

    # --- layout ---

    def _build_toolbar(self) -> None:
        bar = tb.Frame(self)
        bar.pack(fill="x", pady=(0, SPACING_MEDIUM))

        tb.Label(bar, text="Search:").pack(side="left")
        self.search_var = tb.StringVar()
        entry = tb.Entry(bar, textvariable=self.search_var, width=SEARCH_ENTRY_WIDTH)
        entry.pack(side="left", padx=(SPACING_SMALL, SPACING_MEDIUM))
        self.search_var.trace_add("write", lambda *_: self._on_search())

        for facet in self.screen_config.facets:
            choices = facet.choices()
            var = tb.StringVar(value=choices[0][0])
            combo = ttk.Combobox(
                bar,
                textvariable=var,
                values=[label for label, _ in choices],
                state="readonly",
                width=FACET_COMBO_WIDTH,
            )
            combo.pack(side="left", padx=SPACING_SMALL)
            combo.bind("<<ComboboxSelected>>", lambda e, f=facet.field: self._on_facet(f))
            self._facet_vars[facet.field] = (var, choices)

        tb.Button(bar, text="Download CSV", bootstyle=PRIMARY, command=self._on_export).pack(side="right")
        tb.Button(bar, text="Refresh", bootstyle=SECONDARY, command=self.refresh).pack(side="right", padx=SPACING_SMALL)

        self.count_label = tb.Label(self, text="", font=CONSOLE_FONT_DEFAULT)
        self.count_label.pack(fill="x")
        self.stats_label = tb.Label(self, text="", font=CONSOLE_FONT_DEFAULT, foreground=COLOR_NEUTRAL)
        self.stats_label.pack(fill="x")

    def _build_table(self) -> None:
        table_frame = tb.Frame(self)
        table_frame.pack(fill="both", expand=True, pady=SPACING_SMALL)
        columns = [c.header for c in self.screen_config.columns]
        self.tree = ttk.Treeview(table_frame, columns=columns, show="headings", style="Console.Treeview")
        for col in self.screen_config.columns:
            if col.sortable:
                self.tree.heading(col.header, text=col.header, command=lambda c=col: self._on_sort(c.path, c.kind))
            else:
                self.tree.heading(col.header, text=col.header)
            self.tree.column(col.header, width=col.width, anchor="e" if col.kind == KIND_NUMBER else "w")
        vsb = ttk.Scrollbar(table_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        table_frame.grid_rowconfigure(0, weight=1)
        table_frame.grid_columnconfigure(0, weight=1)
        self.tree.tag_configure("profit", foreground=COLOR_PROFIT)
        self.tree.tag_configure("loss", foreground=COLOR_LOSS)
        self.tree.bind("<Double-1>", self._on_open_row)

    def _build_pager(self) -> None:
        pager = tb.Frame(self)
        pager.pack(fill="x", pady=(SPACING_MEDIUM, 0))
        tb.Label(pager, text="Rows per page:").pack(side="left")
        self.page_size_var = tb.StringVar(value=str(self.screen.engine.page.page_size))
        size_combo = ttk.Combobox(
            pager,
            textvariable=self.page_size_var,
            values=[str(n) for n in PAGE_SIZE_OPTIONS],
            state="readonly",
            width=5,
        )
        size_combo.pack(side="left", padx=SPACING_SMALL)
        size_combo.bind("<<ComboboxSelected>>", lambda e: self._on_page_size())

        engine = self.screen.engine
        for text, action in (
            (">>", engine.last_page),
            (">", engine.next_page),
            ("<", engine.previous_page),
            ("<<", engine.first_page),
        ):
            tb.Button(pager, text=text, style="Pager.TButton",
                      command=lambda a=action: self._run(a)).pack(side="right", padx=1)
        self.page_label = tb.Label(pager, text="")
        self.page_label.pack(side="right", padx=SPACING_MEDIUM)
        self.range_label = tb.Label(pager, text="")
        self.range_label.pack(side="right", padx=SPACING_MEDIUM)

    # --- rendering ---

    def render(self) -> None:
        """Redraw rows, count caption and pager from the engine's current result."""
        result = self.screen.result
        for iid in self.tree.get_children(""):
            self.tree.delete(iid)
        for index, record in enumerate(result["visible_rows"]):
            values = [format_cell(resolve_raw(record, c.path), c.kind) for c in self.screen_config.columns]
            self.tree.insert("", tk.END, iid=str(index), values=values, tags=self._row_tags(record))

        caption = f"Showing {len(result['visible_rows'])} of {result['filtered_sorted_count']} {self.screen_config.title.lower()}"
        if result["filtered_sorted_count"] != result["total_count"]:
            caption += f" (filtered from {result['total_count']} total)"
        self.count_label.config(text=caption)
        self.stats_label.config(text=stats_caption(self.screen.stats()))
        self.range_label.config(text=page_caption(result["start_index"], result["end_index"], result["filtered_sorted_count"]))
        self.page_label.config(text=f"{result['current_page']} / {result['total_pages']}")
        self._render_sort_arrows()

    def _row_tags(self, record: Dict[str, Any]) -> Tuple[str, ...]:
        tag = pnl_row_tag(record, PNL_PATHS)
        return (tag,) if tag else ()

    def _render_sort_arrows(self) -> None:
        sort = self.screen.engine.sort
        for col in self.screen_config.columns:
            text = col.header
            if sort.field == col.path:
                text += " ▲" if sort.direction == SORT_ASC else " ▼"
            self.tree.heading(col.header, text=text)

    # --- events ---

    def _run(self, action) -> None:
        action()
        self.render()

    def _on_search(self) -> None:
        self._run(lambda: self.screen.engine.set_query(self.search_var.get()))

    def _on_facet(self, field: str) -> None:
        var, choices = self._facet_vars[field]
        value = dict(choices).get(var.get())
        self._run(lambda: self.screen.engine.set_facet(field, value))

    def _on_sort(self, path: str, kind: str) -> None:
        self._run(lambda: self.screen.engine.toggle_sort(path, kind))

    def _on_page_size(self) -> None:
        self._run(lambda: self.screen.engine.set_page_size(int(self.page_size_var.get())))

    def _on_open_row(self, event=None) -> None:
        selected = self.tree.selection()
        if not selected:
            return
        rows = self.screen.result["visible_rows"]
        index = int(selected[0])
        if index < len(rows):
            ui_dialogs.show_record(self, self.screen, rows[index], on_change=self.render)

    def _on_export(self) -> None:
        ui_dialogs.export_csv(self, self.screen)

    def refresh(self) -> None:
        """Refetch the collection; on failure keep showing the previous rows."""
        logger.debug("Refresh requested for %s", self.screen_config.key)
        try:
            if not self.screen.refresh():
                return
        except AuthenticationError as e:
            if self.on_auth_error is not None:
                self.on_auth_error(e)
            else:
                ui_dialogs.show_api_error(self, f"Failed to fetch {self.screen_config.title.lower()}", e)
        except ApiError as e:
            ui_dialogs.show_api_error(self, f"Failed to fetch {self.screen_config.title.lower()}", e)
        self.render()
