"""A table wrapped in a container together with its search bar and sort menu."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from rich.region import Region

from td_canvas.config.settings import CanvasSettings
from td_canvas.core.bases import BaseWidget
from td_canvas.core.events import KeyEvent
from td_canvas.core.protocols import Widget, WidgetId
from td_canvas.core.signals import Signal, SignalKind
from td_canvas.system.components.container import Container
from td_canvas.system.components.search_bar import SEARCH_BAR_HEIGHT, SearchBar
from td_canvas.system.components.sort_menu import SortMenu
from td_canvas.system.components.table import TextTable
from td_canvas.system.components.table_widths import WidthStrategy
from td_canvas.system.layout import Length, Min
from td_canvas.system.models import TableColumn, TableRow

if TYPE_CHECKING:
    from td_canvas.config.settings import AppState
    from td_canvas.system.frame import Frame

logger = logging.getLogger(__name__)

# Child widgets take the IDs right after the widget's own one.
TABLE_ID_OFFSET = 1
SEARCH_ID_OFFSET = 2
SORT_ID_OFFSET = 3
BODY_ID_OFFSET = 4
RESERVED_IDS = 5


class ScrollSearchTable(BaseWidget):
    """Scrollable, searchable and sortable table.

    The outer row container starts out holding only the table. Opening the
    sort menu puts it to the left of the table; opening search stacks a
    search bar under the table. While either is open it receives keys first,
    and Escape closes it.

    ``widget_id`` is the ID of the outer container; the following
    ``RESERVED_IDS - 1`` IDs are used for the children.
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
        margin: int = 0,
    ) -> None:
        super().__init__(widget_id)
        self.is_searchable = True
        self.has_sort_menu = True
        self.is_search_open = False
        self.is_sort_open = False

        self.table = TextTable(
            widget_id + TABLE_ID_OFFSET,
            columns,
            rows,
            settings,
            width_strategy=width_strategy,
            title=title,
        )
        self.search_bar = SearchBar(widget_id + SEARCH_ID_OFFSET)
        self.sort_menu = SortMenu(widget_id + SORT_ID_OFFSET, lambda: self.table.columns)
        self._body = Container.column(widget_id + BODY_ID_OFFSET)
        self.container = Container.row(widget_id, margin=margin)
        self.container.add_child(self.table, Min(1))

    # Builders

    def with_search(self, enabled: bool = True) -> "ScrollSearchTable":
        self.is_searchable = enabled
        if not enabled and self.is_search_open:
            self.close_search()
        return self

    def with_sort_menu(self, enabled: bool = True) -> "ScrollSearchTable":
        self.has_sort_menu = enabled
        if not enabled and self.is_sort_open:
            self.close_sort()
        return self

    # Widget

    @property
    def widget_id(self) -> WidgetId:
        return self.container.widget_id

    def id(self) -> WidgetId:
        return self.container.widget_id

    @property
    def bounds(self) -> Region:
        return self.container.bounds

    def set_bounds(self, bounds: Region) -> None:
        self.container.set_bounds(bounds)

    def name(self) -> str | None:
        return self.table.name()

    def children(self) -> list[Widget]:
        return self.container.children()

    def _part_ids(self) -> set[WidgetId]:
        return set(range(self.widget_id, self.widget_id + RESERVED_IDS))

    def draw(self, frame: "Frame", state: "AppState") -> None:
        # Focus anywhere in the widget highlights the part receiving keys.
        if state.selected_widget_id in self._part_ids():
            state = state.focus(self.focused_widget_id())
        self.container.draw(frame, state)

    @property
    def search_query(self) -> str:
        return self.search_bar.query

    def update_data(
        self, columns: Sequence[TableColumn], rows: Sequence[TableRow]
    ) -> None:
        self.table.update_data(columns, rows)
        if self.is_sort_open:
            self._rebuild()

    # Panels

    def _rebuild(self) -> None:
        if self.is_search_open:
            self._body.set_children(
                {
                    self.table.widget_id: (self.table, Min(1)),
                    self.search_bar.widget_id: (self.search_bar, Length(SEARCH_BAR_HEIGHT)),
                }
            )
            body = (self._body, Min(1))
        else:
            self._body.set_children({})
            body = (self.table, Min(1))

        children = {}
        if self.is_sort_open:
            children[self.sort_menu.widget_id] = (
                self.sort_menu,
                Length(self.sort_menu.preferred_width()),
            )
        children[body[0].widget_id] = body
        self.container.set_children(children)

    def open_search(self) -> None:
        if not self.is_searchable or self.is_search_open:
            return
        self.is_search_open = True
        logger.debug("Table %s search opened", self.widget_id)
        self._rebuild()

    def close_search(self, clear: bool = False) -> None:
        if clear:
            self.search_bar.clear()
        if not self.is_search_open:
            return
        self.is_search_open = False
        logger.debug("Table %s search closed", self.widget_id)
        self._rebuild()

    def open_sort(self) -> None:
        if not self.has_sort_menu or self.is_sort_open:
            return
        self.is_sort_open = True
        self.sort_menu.reset_cursor()
        logger.debug("Table %s sort menu opened", self.widget_id)
        self._rebuild()

    def close_sort(self) -> None:
        if not self.is_sort_open:
            return
        self.is_sort_open = False
        logger.debug("Table %s sort menu closed", self.widget_id)
        self._rebuild()

    def focused_widget_id(self) -> WidgetId:
        """ID of the part that currently receives keys."""
        if self.is_sort_open:
            return self.sort_menu.widget_id
        if self.is_search_open:
            return self.search_bar.widget_id
        return self.table.widget_id

    def _handle_signal(self, signal: Signal | None) -> Signal | None:
        if signal is None:
            return None
        if signal.kind is SignalKind.OPEN_SEARCH and self.is_searchable:
            self.open_search()
            return None
        if signal.kind is SignalKind.OPEN_SORT and self.has_sort_menu:
            self.open_sort()
            return None
        return signal

    # Input

    def on_key(self, event: KeyEvent) -> Signal | None:
        if self.is_sort_open:
            if event.key == "escape":
                self.close_sort()
                return None
            signal = self.sort_menu.on_key(event)
            if signal is not None and signal.kind is SignalKind.SELECT_COLUMN:
                self.close_sort()
            return signal
        if self.is_search_open:
            if event.key == "escape":
                self.close_search(clear=True)
                return None
            if event.key == "enter":
                self.close_search()
                return None
            return self.search_bar.on_key(event)
        return self._handle_signal(self.table.on_key(event))

    def on_scroll(self) -> Signal | None:
        return self.table.on_scroll()

    def on_left_click(self, x: int, y: int) -> Signal | None:
        if self.is_sort_open and self.sort_menu.is_hit(x, y):
            signal = self.sort_menu.on_left_click(x, y)
            if signal is not None:
                self.close_sort()
            return signal
        if self.table.is_hit(x, y):
            return self._handle_signal(self.table.on_left_click(x, y))
        return None


__all__ = ["RESERVED_IDS", "ScrollSearchTable"]
