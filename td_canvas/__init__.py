"""Widget, layout and input core for a terminal dashboard."""

from td_canvas.api import (
    AppState,
    ConsoleFrame,
    Container,
    ScrollSearchTable,
    Signal,
    TableColumn,
    TextTable,
    configure_logging,
)

__all__ = [
    "AppState",
    "ConsoleFrame",
    "Container",
    "ScrollSearchTable",
    "Signal",
    "TableColumn",
    "TextTable",
    "configure_logging",
]
