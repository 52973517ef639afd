"""UI package for Trade Console: main window, list screens and dialogs."""

__all__ = ["AdminConsoleApp"]


def __getattr__(name: str):
    """Lazy-load AdminConsoleApp so ui.utils can be used without GUI deps."""
    if name == "AdminConsoleApp":
        from trade_console.ui.main_window import AdminConsoleApp
        return AdminConsoleApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
