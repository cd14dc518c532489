from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Sequence

from prompt_toolkit.keys import Keys
from rich.panel import Panel
from rich.text import Text

from td_canvas.core import theme
from td_canvas.core.bases import BaseWidget, normalize_shift
from td_canvas.core.events import KeyEvent
from td_canvas.core.signals import Signal
from td_canvas.system.models import TableColumn
from td_canvas.system.text import grapheme_count

if TYPE_CHECKING:
    from td_canvas.config.settings import AppState
    from td_canvas.system.frame import Frame


class SortMenu(BaseWidget):
    """Vertical list of column headers; Enter picks the sort column.

    Columns are read through ``columns`` on every use so the menu follows
    the table's current data.
    """

    def __init__(self, widget_id: int, columns: Callable[[], Sequence[TableColumn]]) -> None:
        super().__init__(widget_id)
        self._columns = columns
        self.cursor = 0

    def name(self) -> str | None:
        return theme.SORT_MENU_TITLE

    def entries(self) -> list[tuple[int, TableColumn]]:
        return [
            (index, column)
            for index, column in enumerate(self._columns())
            if not column.is_hidden
        ]

    def preferred_width(self) -> int:
        widest = max(
            (grapheme_count(column.header) for _index, column in self.entries()),
            default=0,
        )
        # Border on both sides plus the cursor marker.
        return max(widest, grapheme_count(theme.SORT_MENU_TITLE)) + 4

    def reset_cursor(self) -> None:
        entries = self.entries()
        self.cursor = next(
            (pos for pos, (_index, column) in enumerate(entries) if column.is_sorting_column),
            0,
        )

    def on_key(self, event: KeyEvent) -> Signal | None:
        if not event.is_bare:
            return normalize_shift(self, event)
        entries = self.entries()
        if not entries:
            return None
        if event.key in (Keys.Up.value, "k"):
            self.cursor = max(0, self.cursor - 1)
        elif event.key in (Keys.Down.value, "j"):
            self.cursor = min(len(entries) - 1, self.cursor + 1)
        elif event.key == "enter":
            self.cursor = min(self.cursor, len(entries) - 1)
            return Signal.select_column(entries[self.cursor][0])
        return None

    def on_left_click(self, x: int, y: int) -> Signal | None:
        if not self.is_hit(x, y):
            return None
        _relative_x, relative_y = self.to_relative(x, y)
        entries = self.entries()
        position = relative_y - 1
        if 0 <= position < len(entries):
            self.cursor = position
            return Signal.select_column(entries[position][0])
        return None

    def draw(self, frame: "Frame", state: "AppState") -> None:
        focused = state.is_selected(self.widget_id)
        text = Text(no_wrap=True, overflow="crop")
        for position, (_index, column) in enumerate(self.entries()):
            if position:
                text.append("\n")
            if position == self.cursor:
                text.append(
                    f"> {column.header}",
                    style=theme.row_highlight_style(state.colours, True),
                )
            else:
                text.append(f"  {column.header}", style=state.colours.text_style)
        frame.render(
            Panel(
                text,
                box=theme.TABLE_BOX,
                title=theme.SORT_MENU_TITLE,
                title_align="left",
                border_style=theme.border_style(state.colours, focused),
                padding=0,
                expand=True,
            ),
            self.bounds,
        )
