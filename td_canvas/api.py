"""Public API surface for td_canvas."""

from td_canvas.config.settings import AppState, CanvasColours, CanvasSettings
from td_canvas.core.events import KeyEvent, Modifiers
from td_canvas.core.protocols import ClickHandler, KeyHandler, ScrollHandler, Widget
from td_canvas.core.signals import Signal, SignalKind
from td_canvas.errors import CanvasError, ConfigurationError, ConstraintError, WidgetTreeError
from td_canvas.logging import configure_logging
from td_canvas.system.components.container import Container
from td_canvas.system.components.table import TextTable
from td_canvas.system.components.table_widths import WidthStrategy
from td_canvas.system.dispatch import (
    dispatch_key,
    dispatch_mouse,
    focus_path,
    hit_path,
    widget_at,
)
from td_canvas.system.frame import ConsoleFrame, Frame, RecordingFrame
from td_canvas.system.layout import Direction, Length, Max, Min, Percentage, Ratio, partition
from td_canvas.system.models import FlexLength, FlexPercentage, TableColumn
from td_canvas.widgets.scroll_search_table import ScrollSearchTable

__all__ = [
    "AppState",
    "CanvasColours",
    "CanvasError",
    "CanvasSettings",
    "ClickHandler",
    "ConfigurationError",
    "ConsoleFrame",
    "ConstraintError",
    "Container",
    "Direction",
    "FlexLength",
    "FlexPercentage",
    "Frame",
    "KeyEvent",
    "KeyHandler",
    "Length",
    "Max",
    "Min",
    "Modifiers",
    "Percentage",
    "Ratio",
    "RecordingFrame",
    "ScrollHandler",
    "ScrollSearchTable",
    "Signal",
    "SignalKind",
    "TableColumn",
    "TextTable",
    "Widget",
    "WidgetTreeError",
    "WidthStrategy",
    "configure_logging",
    "dispatch_key",
    "dispatch_mouse",
    "focus_path",
    "hit_path",
    "partition",
    "widget_at",
]
