"""Main application window for Trade Console: one notebook tab per list screen."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Dict, Optional

import ttkbootstrap as tb

from trade_console.app import build_screen, list_screens, refresh_screens
from trade_console.services.api import AdminApiClient, AuthenticationError
from trade_console.theming.style import THEME_NAME, setup_styles
from trade_console.ui import dialogs as ui_dialogs
from trade_console.ui.list_view import ListScreenFrame

logger = logging.getLogger(__name__)


class AdminConsoleApp(tb.Window):
    """Operator console: menus, sign-in and a tab per screen, each with its own view state."""

    def __init__(self, client: Optional[AdminApiClient] = None) -> None:
        super().__init__(themename=THEME_NAME)
        self.title("Trade Console")
        self.geometry("1280x760")
        setup_styles(self)
        self.client = client or AdminApiClient()
        self.frames: Dict[str, ListScreenFrame] = {}

        self._create_menu()
        self.tab_control = ttk.Notebook(self)
        self.tab_control.pack(fill="both", expand=True)
        for key in list_screens():
            frame = ListScreenFrame(self.tab_control, build_screen(key, self.client), on_auth_error=self._on_auth_error)
            self.tab_control.add(frame, text=frame.screen_config.title)
            self.frames[key] = frame

        self.status_label = tb.Label(self, text="")
        self.status_label.pack(fill="x", side="bottom")
        self._update_status()

        if self.client.token:
            self.after(100, self.refresh_all)
        else:
            self.after(100, self.sign_in)

    def _create_menu(self) -> None:
        menubar = tk.Menu(self)
        self.config(menu=menubar)

        file_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="File", menu=file_menu)
        file_menu.add_command(label="Download Current Tab as CSV...", command=self.export_current)
        file_menu.add_separator()
        file_menu.add_command(label="Quit", command=self.destroy)

        session_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Session", menu=session_menu)
        session_menu.add_command(label="Sign In...", command=self.sign_in)
        session_menu.add_command(label="Sign Out", command=self.sign_out)

        view_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="View", menu=view_menu)
        view_menu.add_command(label="Refresh Current Tab", command=self.refresh_current)
        view_menu.add_command(label="Refresh All", command=self.refresh_all)

        help_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Help", menu=help_menu)
        help_menu.add_command(label="About", command=self.show_about)

    def current_frame(self) -> Optional[ListScreenFrame]:
        selected = self.tab_control.select()
        if not selected:
            return None
        widget = self.nametowidget(selected)
        return widget if isinstance(widget, ListScreenFrame) else None

    def refresh_current(self) -> None:
        frame = self.current_frame()
        if frame is not None:
            frame.refresh()
        self._update_status()

    def refresh_all(self) -> None:
        """Refresh every tab; a 401 stops the sweep and asks for sign-in once."""
        try:
            errors = refresh_screens(frame.screen for frame in self.frames.values())
        except AuthenticationError as e:
            errors = {}
            self._on_auth_error(e)
        for frame in self.frames.values():
            frame.render()
        self._update_status()
        if errors:
            lines = [f"{self.frames[key].screen_config.title}: {e.message}" for key, e in errors.items()]
            messagebox.showerror("Refresh Failed", "\n".join(lines), parent=self)

    def _on_auth_error(self, error: AuthenticationError) -> None:
        logger.warning("Session rejected: %s", error.message)
        self._update_status()
        messagebox.showwarning("Session Expired", f"{error.message}\n\nPlease sign in again.", parent=self)
        self.sign_in()

    def export_current(self) -> None:
        frame = self.current_frame()
        if frame is not None:
            ui_dialogs.export_csv(self, frame.screen)

    def sign_in(self) -> None:
        ui_dialogs.login_dialog(self, self.client, on_success=self.refresh_all)

    def sign_out(self) -> None:
        self.client.logout()
        logger.info("Signed out")
        self._update_status()

    def _update_status(self) -> None:
        state = "Signed in" if self.client.token else "Not signed in"
        self.status_label.config(text=f"{state} - {self.client.base_url}")

    def show_about(self) -> None:
        messagebox.showinfo(
            "About",
            "Trade Console\n\nSearch, filter, sort, page and export the "
            "brokerage admin collections.",
            parent=self,
        )
