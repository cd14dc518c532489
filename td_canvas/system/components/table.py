"""Scrollable text table widget."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from prompt_toolkit.keys import Keys
from rich.console import RenderableType
from rich.panel import Panel
from rich.region import Region
from rich.table import Table
from rich.text import Text

from td_canvas.config.settings import CanvasSettings
from td_canvas.core import theme
from td_canvas.core.bases import BaseWidget, normalize_shift
from td_canvas.core.events import KeyEvent, Modifiers
from td_canvas.core.protocols import WidgetId
from td_canvas.core.signals import Signal
from td_canvas.system.components.table_scroll import (
    HorizontalScrollState,
    VerticalScrollState,
)
from td_canvas.system.components.table_widths import (
    WidthPlan,
    WidthStrategy,
    compute_widths,
)
from td_canvas.system.layout import Constraint, Length
from td_canvas.system.models import TableColumn, TableRow
from td_canvas.system.text import truncate_graphemes

if TYPE_CHECKING:
    from td_canvas.config.settings import AppState
    from td_canvas.system.frame import Frame

logger = logging.getLogger(__name__)

BORDER_WIDTH = 1
# Top and bottom border plus the header row.
TABLE_HEIGHT_OFFSET = 2 * BORDER_WIDTH + 1

_UP_KEYS = frozenset({Keys.Up.value, "k"})
_DOWN_KEYS = frozenset({Keys.Down.value, "j"})
_LEFT_KEYS = frozenset({Keys.Left.value, "h"})
_RIGHT_KEYS = frozenset({Keys.Right.value, "l"})
_SORT_KEY = Keys.F6.value


@dataclass(frozen=True)
class ColumnSlot:
    """One rendered column: a real column or an indicator cell."""

    width: int
    column: int | None = None
    marker: str = ""


class TextTable(BaseWidget):
    """A header row above a scrollable window of pre-sorted text rows.

    Columns and rows are borrowed from the application: the table reads them
    but never modifies them. Selection, scrolling and column widths are the
    table's own state.
    """

    def __init__(
        self,
        widget_id: WidgetId,
        columns: Sequence[TableColumn],
        rows: Sequence[TableRow],
        settings: CanvasSettings | None = None,
        *,
        width_strategy: WidthStrategy = WidthStrategy.MAX_COLUMN_INFO,
        title: str | None = None,
    ) -> None:
        super().__init__(widget_id)
        self._columns = columns
        self._rows = rows
        self._settings = settings or CanvasSettings()
        self._title = title
        self.width_strategy = width_strategy
        self.vertical = VerticalScrollState()
        self.horizontal = HorizontalScrollState()
        self.start_index = 0
        self.end_index = 0
        self.table_gap = 0
        self._slots: list[ColumnSlot] | None = None
        self._x_bounds: dict[int, tuple[int, int]] = {}
        self._selected_row: int | None = None
        self._pending_g = False

    # Data

    @property
    def columns(self) -> Sequence[TableColumn]:
        return self._columns

    @property
    def rows(self) -> Sequence[TableRow]:
        return self._rows

    @property
    def current_position(self) -> int:
        return self.vertical.current_position

    @property
    def selected_row(self) -> int | None:
        """Index of the highlighted row inside the visible window."""
        return self._selected_row

    def name(self) -> str | None:
        return self._title

    def update_data(
        self, columns: Sequence[TableColumn], rows: Sequence[TableRow]
    ) -> None:
        """Swap in the data for the next frame, keeping the selection valid."""
        self._columns = columns
        self._rows = rows
        self.vertical.clamp(len(rows))
        self.horizontal.clamp(len(self._visible_columns()))
        self._invalidate_widths()
        self.on_scroll()

    def set_width_strategy(self, strategy: WidthStrategy) -> None:
        self.width_strategy = strategy
        self._invalidate_widths()

    def _visible_columns(self) -> list[tuple[int, TableColumn]]:
        return [
            (index, column)
            for index, column in enumerate(self._columns)
            if not column.is_hidden
        ]

    # Geometry

    @property
    def inner_width(self) -> int:
        return max(0, self.bounds.width - 2 * BORDER_WIDTH)

    @property
    def num_visible_rows(self) -> int:
        return max(0, self.bounds.height - TABLE_HEIGHT_OFFSET - self.table_gap)

    @property
    def header_row(self) -> int:
        """Relative y of the header row."""
        return BORDER_WIDTH

    @property
    def first_data_row(self) -> int:
        return BORDER_WIDTH + 1 + self.table_gap

    def set_bounds(self, bounds: Region) -> None:
        if bounds == self.bounds:
            return
        super().set_bounds(bounds)
        self._update_table_gap()
        self._invalidate_widths()
        self.on_scroll()

    def apply_settings(self, settings: CanvasSettings) -> None:
        if settings != self._settings:
            self._settings = settings
            self._update_table_gap()
            self.on_scroll()

    def _update_table_gap(self) -> None:
        if self.bounds.height < self._settings.table_gap_height_limit:
            self.table_gap = 0
        else:
            self.table_gap = self._settings.table_gap

    # Column widths

    def _invalidate_widths(self) -> None:
        self._slots = None

    def _width_plan(self) -> tuple[WidthPlan, list[int]]:
        visible = self._visible_columns()[self.horizontal.offset_multiplier :]
        plan = compute_widths(
            self.width_strategy,
            [column for _index, column in visible],
            self.inner_width,
            scrolled=self.horizontal.offset_multiplier > 0,
        )
        return plan, [index for index, _column in visible]

    def _ensure_slots(self) -> list[ColumnSlot]:
        if self._slots is not None:
            return self._slots
        plan, indices = self._width_plan()
        slots: list[ColumnSlot] = []
        widths = list(plan.widths)
        if plan.leading_indicator:
            slots.append(ColumnSlot(widths.pop(0), marker=theme.SCROLL_LEFT_MARKER))
        trailing = widths.pop() if plan.trailing_indicator else None
        slots.extend(
            ColumnSlot(width, column=index) for width, index in zip(widths, indices)
        )
        if trailing is not None:
            slots.append(ColumnSlot(trailing, marker=theme.OVERFLOW_MARKER))

        self._x_bounds = {}
        left = BORDER_WIDTH
        for slot in slots:
            if slot.column is not None:
                self._x_bounds[slot.column] = (left, left + slot.width)
            left += slot.width
        self._slots = slots
        logger.debug(
            "Table %s column widths %s", self.widget_id, [slot.width for slot in slots]
        )
        return slots

    @property
    def column_widths(self) -> list[Constraint]:
        """The computed widths as fixed-length layout weights."""
        return [Length(slot.width) for slot in self._ensure_slots()]

    def column_x_bounds(self, index: int) -> tuple[int, int] | None:
        """Relative ``[left, right)`` of a rendered column, None if off screen."""
        self._ensure_slots()
        return self._x_bounds.get(index)

    # Input

    def on_key(self, event: KeyEvent) -> Signal | None:
        if event.is_bare:
            return self._on_bare_key(event.key)
        if event.modifiers == Modifiers.CONTROL:
            if event.key == "f":
                return Signal.open_search()
            return None
        return normalize_shift(self, event)

    def _on_bare_key(self, key: str) -> Signal | None:
        pending_g, self._pending_g = self._pending_g, False
        row_count = len(self._rows)

        if key == "/":
            return Signal.open_search()
        if key == _SORT_KEY:
            return Signal.open_sort()
        if key == "g":
            if not pending_g:
                self._pending_g = True
                return None
            self.vertical.jump_to_start()
        elif key in ("G", Keys.End.value):
            self.vertical.jump_to_end(row_count)
        elif key == Keys.Home.value:
            self.vertical.jump_to_start()
        elif key in _UP_KEYS:
            self.vertical.move_up()
        elif key in _DOWN_KEYS:
            self.vertical.move_down(row_count)
        elif key == Keys.PageUp.value:
            self.vertical.move_up(max(1, self.num_visible_rows))
        elif key == Keys.PageDown.value:
            self.vertical.move_down(row_count, max(1, self.num_visible_rows))
        elif key in _LEFT_KEYS:
            self.horizontal.scroll_left()
            self._invalidate_widths()
        elif key in _RIGHT_KEYS:
            self.horizontal.scroll_right(len(self._visible_columns()))
            self._invalidate_widths()
        else:
            return None
        self.on_scroll()
        return None

    def on_scroll(self) -> Signal | None:
        self.start_index, self.end_index = self.vertical.window(self.num_visible_rows)
        current = self.vertical.current_position
        if self._rows and self.start_index <= current < self.end_index:
            self._selected_row = current - self.start_index
        else:
            self._selected_row = None
        return None

    def on_left_click(self, x: int, y: int) -> Signal | None:
        if not self.is_hit(x, y):
            return None
        relative_x, relative_y = self.to_relative(x, y)

        if relative_y == self.header_row:
            self._ensure_slots()
            for index, (left, right) in self._x_bounds.items():
                if left <= relative_x < right:
                    logger.debug("Table %s header %d clicked", self.widget_id, index)
                    return Signal.select_column(index)
            return None

        offset = relative_y - self.first_data_row
        if 0 <= offset < self.num_visible_rows:
            row = self.start_index + offset
            if row < len(self._rows):
                self.vertical.select(row)
                self.on_scroll()
        return None

    # Drawing

    def _cell(self, row: TableRow, slot: ColumnSlot) -> Text:
        if slot.column is None:
            return Text("")
        text = row[slot.column] if slot.column < len(row) else ""
        return Text(truncate_graphemes(text, slot.width))

    def _header_cell(self, slot: ColumnSlot) -> Text:
        if slot.column is None:
            return Text(slot.marker)
        column = self._columns[slot.column]
        style = theme.SORTED_HEADER_STYLE if column.is_sorting_column else ""
        return Text(truncate_graphemes(column.header, slot.width), style=style)

    def _build_table(self, state: "AppState", focused: bool) -> RenderableType:
        slots = self._ensure_slots()
        colours = state.colours
        if not slots:
            return Text("")

        table = Table(
            box=None,
            show_header=False,
            show_edge=False,
            pad_edge=False,
            padding=0,
            collapse_padding=True,
            expand=False,
        )
        for slot in slots:
            table.add_column(
                width=slot.width,
                min_width=slot.width,
                max_width=slot.width,
                no_wrap=True,
                overflow="crop",
            )

        table.add_row(
            *(self._header_cell(slot) for slot in slots),
            style=colours.table_header_style,
        )
        for _ in range(self.table_gap):
            table.add_row(*("" for _slot in slots))

        highlight = theme.row_highlight_style(colours, focused)
        for offset, row in enumerate(self._rows[self.start_index : self.end_index]):
            style = highlight if offset == self._selected_row else colours.text_style
            table.add_row(*(self._cell(row, slot) for slot in slots), style=style)
        return table

    def draw(self, frame: "Frame", state: "AppState") -> None:
        self.apply_settings(state.settings)
        self.on_scroll()
        focused = state.is_selected(self.widget_id)
        panel = Panel(
            self._build_table(state, focused),
            box=theme.TABLE_BOX,
            title=self._title,
            title_align="left",
            border_style=theme.border_style(state.colours, focused),
            style=state.colours.text_style,
            padding=0,
            expand=True,
        )
        frame.render(panel, self.bounds)


__all__ = ["BORDER_WIDTH", "ColumnSlot", "TABLE_HEIGHT_OFFSET", "TextTable"]
