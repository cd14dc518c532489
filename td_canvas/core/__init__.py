"""Widget capability protocols, signals and input events."""

from td_canvas.core.bases import BaseWidget, normalize_shift, region_contains
from td_canvas.core.events import KeyEvent, Modifiers
from td_canvas.core.protocols import (
    ClickHandler,
    KeyHandler,
    ScrollHandler,
    Widget,
    WidgetId,
)
from td_canvas.core.signals import Signal, SignalKind

__all__ = [
    "BaseWidget",
    "ClickHandler",
    "KeyEvent",
    "KeyHandler",
    "Modifiers",
    "ScrollHandler",
    "Signal",
    "SignalKind",
    "Widget",
    "WidgetId",
    "normalize_shift",
    "region_contains",
]
