from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol, runtime_checkable

from rich.region import Region

from td_canvas.core.events import KeyEvent
from td_canvas.core.signals import Signal

if TYPE_CHECKING:
    from td_canvas.config.settings import AppState
    from td_canvas.system.frame import Frame

WidgetId = int


@runtime_checkable
class Widget(Protocol):
    """A node of the layout tree: identifiable, resizable and drawable."""

    @property
    def widget_id(self) -> WidgetId: ...

    @property
    def bounds(self) -> Region: ...

    def draw(self, frame: "Frame", state: "AppState") -> None: ...

    def set_bounds(self, bounds: Region) -> None: ...

    def name(self) -> str | None: ...


@runtime_checkable
class KeyHandler(Protocol):
    def on_key(self, event: KeyEvent) -> Signal | None: ...


@runtime_checkable
class ScrollHandler(Protocol):
    def on_scroll(self) -> Signal | None: ...


@runtime_checkable
class ClickHandler(Protocol):
    """Click handling on absolute terminal coordinates."""

    def is_hit(self, x: int, y: int) -> bool: ...

    def on_left_click(self, x: int, y: int) -> Signal | None: ...

    def on_middle_click(self, x: int, y: int) -> Signal | None: ...

    def on_right_click(self, x: int, y: int) -> Signal | None: ...


@runtime_checkable
class Composite(Protocol):
    """A widget that lays out other widgets."""

    def children(self) -> Iterable[Widget]: ...


@runtime_checkable
class FocusScope(Protocol):
    """A composite that routes input to its own parts.

    Keys and clicks aimed at any widget inside the scope are delivered to the
    scope itself, which knows which part is active.
    """

    def focused_widget_id(self) -> WidgetId: ...


__all__ = [
    "ClickHandler",
    "Composite",
    "FocusScope",
    "KeyHandler",
    "ScrollHandler",
    "Widget",
    "WidgetId",
]
