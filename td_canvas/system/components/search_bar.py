from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.text import Text

from td_canvas.core import theme
from td_canvas.core.bases import BaseWidget, normalize_shift
from td_canvas.core.events import KeyEvent
from td_canvas.core.signals import Signal
from td_canvas.system.text import grapheme_count, truncate_graphemes

if TYPE_CHECKING:
    from td_canvas.config.settings import AppState
    from td_canvas.system.frame import Frame

SEARCH_BAR_HEIGHT = 3


class SearchBar(BaseWidget):
    """Single-line query input shown under a table."""

    def __init__(self, widget_id: int, query: str = "") -> None:
        super().__init__(widget_id)
        self.query = query

    def name(self) -> str | None:
        return "search"

    def clear(self) -> None:
        self.query = ""

    def on_key(self, event: KeyEvent) -> Signal | None:
        if not event.is_bare:
            return normalize_shift(self, event)
        if event.char is not None:
            self.query += event.char
        elif event.key == "backspace" and self.query:
            self.query = truncate_graphemes(self.query, grapheme_count(self.query) - 1)
        return None

    def draw(self, frame: "Frame", state: "AppState") -> None:
        focused = state.is_selected(self.widget_id)
        text = Text(theme.SEARCH_PROMPT, style="bold")
        text.append(self.query, style=theme.SEARCH_STYLE)
        frame.render(
            Panel(
                text,
                box=theme.TABLE_BOX,
                border_style=theme.border_style(state.colours, focused),
                padding=0,
                expand=True,
            ),
            self.bounds,
        )
