from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from rich.region import Region

from td_canvas.core.events import KeyEvent, Modifiers
from td_canvas.core.protocols import WidgetId
from td_canvas.core.signals import Signal

if TYPE_CHECKING:
    from td_canvas.config.settings import AppState
    from td_canvas.system.frame import Frame

EMPTY_REGION = Region(0, 0, 0, 0)


def region_contains(region: Region, x: int, y: int) -> bool:
    return (
        region.x <= x < region.x + region.width
        and region.y <= y < region.y + region.height
    )


class BaseWidget(ABC):
    """Stores a widget's ID and region once for drawing and hit-testing."""

    def __init__(self, widget_id: WidgetId) -> None:
        self._widget_id = widget_id
        self._bounds = EMPTY_REGION

    @property
    def widget_id(self) -> WidgetId:
        return self._widget_id

    def id(self) -> WidgetId:
        return self._widget_id

    @property
    def bounds(self) -> Region:
        return self._bounds

    def set_bounds(self, bounds: Region) -> None:
        self._bounds = bounds

    def name(self) -> str | None:
        return None

    @abstractmethod
    def draw(self, frame: "Frame", state: "AppState") -> None:
        """Render the widget into its last assigned region."""

    def is_hit(self, x: int, y: int) -> bool:
        return region_contains(self.bounds, x, y)

    def to_relative(self, x: int, y: int) -> tuple[int, int]:
        return max(0, x - self.bounds.x), max(0, y - self.bounds.y)

    def on_left_click(self, x: int, y: int) -> Signal | None:
        _ = (x, y)
        return None

    def on_middle_click(self, x: int, y: int) -> Signal | None:
        _ = (x, y)
        return None

    def on_right_click(self, x: int, y: int) -> Signal | None:
        _ = (x, y)
        return None

    def on_scroll(self) -> Signal | None:
        return None


def normalize_shift(handler, event: KeyEvent) -> Signal | None:
    """Re-dispatch shift+character as the bare character.

    Terminals report a capital letter as shift plus the letter, so handlers
    call this instead of binding every letter twice.
    """
    if event.modifiers == Modifiers.SHIFT and event.char is not None:
        return handler.on_key(event.without_modifiers())
    return None


__all__ = ["BaseWidget", "EMPTY_REGION", "normalize_shift", "region_contains"]
