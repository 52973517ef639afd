"""Dialog windows for Trade Console: sign-in, record details, CSV export, errors."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from tkinter.constants import EW, W
from typing import Any, Callable, Dict, Optional

import ttkbootstrap as tb
from ttkbootstrap.constants import DANGER, SUCCESS

from trade_console.services.api import AdminApiClient, ApiError
from trade_console.services.collections import record_id
from trade_console.services.fields import stringify
from trade_console.services.screen import ListScreen
from trade_console.theming.style import PADDING, SPACING_MEDIUM

logger = logging.getLogger(__name__)


def show_api_error(parent: tk.Misc, title: str, error: ApiError) -> None:
    """Show an API failure; 401s get a sign-in hint."""
    message = error.message
    if error.status_code == 401:
        message += "\n\nYour session has expired. Please sign in again."
    messagebox.showerror(title, message, parent=parent)


def export_csv(parent: tk.Misc, screen: ListScreen) -> None:
    """Ask for a file name and write the filtered+sorted rows of screen as CSV."""
    path = filedialog.asksaveasfilename(
        parent=parent,
        title=f"Download {screen.config.title}",
        defaultextension=".csv",
        initialfile=screen.export_filename(),
        filetypes=[("CSV files", "*.csv"), ("All files", "*.*")],
    )
    if not path:
        return
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            count = screen.export_csv(f)
    except OSError as e:
        logger.warning("Export to %s failed: %s", path, e)
        messagebox.showerror("Export Error", f"Error writing {path}: {e}", parent=parent)
        return
    messagebox.showinfo("Export", f"Exported {count} row(s) to {path}", parent=parent)


def _flatten(record: Dict[str, Any], prefix: str = "") -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key, value in record.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            out.update(_flatten(value, f"{name}."))
        else:
            out[name] = stringify(value)
    return out


def show_record(
    parent: tk.Misc,
    screen: ListScreen,
    record: Dict[str, Any],
    on_change: Optional[Callable[[], None]] = None,
) -> None:
    """
    Detail view of one record (nested records shown as dotted fields).

    Screens with a status action get a status dropdown plus admin notes;
    deletable screens get a Delete button. on_change runs after either
    succeeds so the caller can re-render.
    """
    title = screen.config.title
    rid = record_id(record)
    dialog = tk.Toplevel(parent)
    dialog.title(f"{title} details")
    dialog.geometry("540x560")
    dialog.transient(parent)

    frame = tb.Frame(dialog, padding=PADDING)
    frame.pack(fill="both", expand=True)
    text = tk.Text(frame, wrap="word", height=20)
    for name, value in sorted(_flatten(record).items()):
        text.insert(tk.END, f"{name}: {value}\n")
    text.config(state="disabled")
    text.pack(fill="both", expand=True)

    def changed():
        dialog.destroy()
        if on_change is not None:
            on_change()

    if screen.can_change_status and rid is not None:
        options = list(screen.config.status_options)
        current = record.get(screen.config.status_field)
        current_label = next((label for label, value in options if value == current), options[0][0])
        form = tb.Frame(frame)
        form.pack(fill="x", pady=(SPACING_MEDIUM, 0))
        tk.Label(form, text="Status:").grid(row=0, column=0, sticky=W, pady=5)
        status_var = tb.StringVar(value=current_label)
        ttk.Combobox(form, textvariable=status_var, values=[label for label, _ in options],
                     state="readonly").grid(row=0, column=1, sticky=EW, pady=5)
        tk.Label(form, text="Admin notes:").grid(row=1, column=0, sticky=W, pady=5)
        notes_var = tb.StringVar()
        tb.Entry(form, textvariable=notes_var).grid(row=1, column=1, sticky=EW, pady=5)
        form.grid_columnconfigure(1, weight=1)

        def apply_status():
            value = dict(options)[status_var.get()]
            extra = {"adminNotes": notes_var.get().strip()} if notes_var.get().strip() else {}
            try:
                screen.change_status(rid, value, **extra)
            except ApiError as e:
                show_api_error(dialog, "Failed to update status", e)
                return
            changed()

        tb.Button(form, text="Update Status", bootstyle=SUCCESS, command=apply_status).grid(
            row=2, column=0, columnspan=2, pady=SPACING_MEDIUM
        )

    buttons = tb.Frame(frame)
    buttons.pack(fill="x")
    if screen.can_delete and rid is not None:
        def delete():
            if not messagebox.askyesno("Delete", f"Delete this {title.lower().rstrip('s')}? This cannot be undone.",
                                       parent=dialog):
                return
            try:
                screen.delete(rid)
            except ApiError as e:
                show_api_error(dialog, "Failed to delete", e)
                return
            changed()

        tb.Button(buttons, text="Delete", bootstyle=DANGER, command=delete).pack(side="left")
    tb.Button(buttons, text="Close", command=dialog.destroy).pack(side="right")

def login_dialog(parent: tk.Misc, client: AdminApiClient, on_success: Callable[[], None]) -> None:
    """Show the sign-in dialog; on success the token is stored and on_success runs."""
    dialog = tk.Toplevel(parent)
    dialog.title("Sign In")
    dialog.geometry("340x200")
    dialog.transient(parent)
    dialog.grab_set()

    frame = tb.Frame(dialog, padding=PADDING)
    frame.pack(fill="both", expand=True)

    tk.Label(frame, text="Email:").grid(row=0, column=0, sticky=W, pady=5)
    email_var = tb.StringVar()
    tb.Entry(frame, textvariable=email_var, width=28).grid(row=0, column=1, sticky=EW, pady=5)
    tk.Label(frame, text="Password:").grid(row=1, column=0, sticky=W, pady=5)
    password_var = tb.StringVar()
    tb.Entry(frame, textvariable=password_var, show="*", width=28).grid(row=1, column=1, sticky=EW, pady=5)

    def sign_in():
        email = email_var.get().strip()
        if not email or not password_var.get():
            messagebox.showwarning("Input Error", "Please enter email and password.", parent=dialog)
            return
        try:
            client.login(email, password_var.get())
        except ApiError as e:
            messagebox.showerror("Sign In Failed", e.message or "Invalid credentials. Please try again.", parent=dialog)
            return
        except OSError as e:
            messagebox.showerror("Save Error", f"Error saving session: {e}", parent=dialog)
            return
        dialog.destroy()
        on_success()

    tb.Button(frame, text="Sign In", bootstyle=SUCCESS, command=sign_in).grid(
        row=2, column=0, columnspan=2, pady=SPACING_MEDIUM
    )
    frame.grid_columnconfigure(1, weight=1)
