"""Application bootstrap and core API entrypoints for Trade Console.

Provides a small core API (list_screens, build_screen, refresh_screens,
export_screen) for scripts and tests. The desktop console is launched via
main(), which imports the Tk UI lazily so the services stay usable without GUI deps.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, TextIO

from trade_console.config.constants import LOG_FILE, LOG_LEVEL
from trade_console.config.screens import SCREENS, get_screen
from trade_console.logging_config import setup_logging
from trade_console.services.api import AdminApiClient, ApiError, AuthenticationError
from trade_console.services.screen import ListScreen


def list_screens() -> List[str]:
    """Return the keys of all list screens, in navigation order."""
    return list(SCREENS)


def build_screen(key: str, client: Optional[AdminApiClient] = None) -> ListScreen:
    """Create a ListScreen for key with its own view engine.

    Args:
        key: Screen key, e.g. "deposits".
        client: API client to fetch with; a default client is created if None.

    Raises:
        KeyError: for an unknown screen key.
    """
    return ListScreen(get_screen(key), client or AdminApiClient())


def export_screen(key: str, stream: TextIO, client: Optional[AdminApiClient] = None) -> int:
    """Fetch a screen's whole collection and write it as CSV (default filters/sort).

    Returns:
        Number of data rows written.
    """
    screen = build_screen(key, client)
    screen.refresh()
    return screen.export_csv(stream)


def refresh_screens(screens: Iterable[ListScreen]) -> Dict[str, ApiError]:
    """Refresh each screen in turn and collect per-screen failures by key.

    Raises:
        AuthenticationError: on the first 401; remaining screens are not tried
            since the session token has just been cleared.
    """
    errors: Dict[str, ApiError] = {}
    for screen in screens:
        try:
            screen.refresh()
        except AuthenticationError:
            raise
        except ApiError as e:
            errors[screen.config.key] = e
    return errors


def main() -> None:
    """Launch the Trade Console Tkinter application."""
    setup_logging(LOG_LEVEL, LOG_FILE)
    from trade_console.ui.main_window import AdminConsoleApp  # Deferred so core API is usable without GUI deps

    app = AdminConsoleApp()
    app.mainloop()
