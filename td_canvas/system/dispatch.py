"""Routing of key and mouse events through the widget tree."""

from __future__ import annotations

import logging
from typing import Sequence

from prompt_toolkit.keys import Keys
from prompt_toolkit.mouse_events import MouseButton, MouseEvent, MouseEventType

from td_canvas.core.events import KeyEvent
from td_canvas.core.protocols import (
    ClickHandler,
    Composite,
    FocusScope,
    KeyHandler,
    ScrollHandler,
    Widget,
    WidgetId,
)
from td_canvas.core.signals import Signal

logger = logging.getLogger(__name__)


def focus_path(root: Widget, widget_id: WidgetId) -> list[Widget]:
    """Widgets from ``root`` down to the one with ``widget_id``; empty if absent."""
    if root.widget_id == widget_id:
        return [root]
    if isinstance(root, Composite):
        for child in root.children():
            path = focus_path(child, widget_id)
            if path:
                return [root, *path]
    return []


def hit_path(root: Widget, x: int, y: int) -> list[Widget]:
    """Widgets from ``root`` down to the innermost one containing the point."""
    if not isinstance(root, ClickHandler) or not root.is_hit(x, y):
        return []
    if isinstance(root, Composite):
        for child in root.children():
            path = hit_path(child, x, y)
            if path:
                return [root, *path]
    return [root]


def widget_at(root: Widget, x: int, y: int) -> Widget | None:
    """Innermost widget whose region contains the absolute point."""
    path = hit_path(root, x, y)
    return path[-1] if path else None


def _input_target(path: Sequence[Widget]) -> int:
    # The outermost focus scope on the path owns input for everything below it.
    for index, widget in enumerate(path):
        if isinstance(widget, FocusScope):
            return index
    return len(path) - 1


def dispatch_key(path: Sequence[Widget], event: KeyEvent) -> Signal | None:
    """Deliver ``event`` to the focused widget, the last entry of ``path``.

    When the focused widget sits inside a focus scope the scope receives the
    event instead. Focus-movement keys left unhandled are retried on the
    ancestors, nearest first. Anything still unhandled is dropped.
    """
    if not path:
        return None
    target = _input_target(path)
    focused = path[target]
    signal = focused.on_key(event) if isinstance(focused, KeyHandler) else None
    if signal is not None or not event.is_focus_movement():
        return signal
    for ancestor in reversed(path[:target]):
        if isinstance(ancestor, KeyHandler):
            signal = ancestor.on_key(event)
            if signal is not None:
                return signal
    logger.debug("Dropped unhandled focus movement %s", event)
    return None


_WHEEL_KEYS = {
    MouseEventType.SCROLL_UP: KeyEvent(Keys.Up.value),
    MouseEventType.SCROLL_DOWN: KeyEvent(Keys.Down.value),
}


def dispatch_mouse(root: Widget, event: MouseEvent) -> Signal | None:
    """Deliver a prompt_toolkit mouse event to the widget under the pointer.

    Button presses go to the matching click handler. Wheel events move the
    selection of the widget under the pointer like arrow keys and then let it
    recompute its visible window. As with keys, a focus scope around the
    widget receives the event in its place.
    """
    x, y = event.position.x, event.position.y
    path = hit_path(root, x, y)
    if not path:
        return None
    target = path[_input_target(path)]

    if event.event_type is MouseEventType.MOUSE_DOWN and isinstance(target, ClickHandler):
        if event.button is MouseButton.LEFT:
            return target.on_left_click(x, y)
        if event.button is MouseButton.MIDDLE:
            return target.on_middle_click(x, y)
        if event.button is MouseButton.RIGHT:
            return target.on_right_click(x, y)
        return None

    wheel = _WHEEL_KEYS.get(event.event_type)
    if wheel is not None:
        signal = target.on_key(wheel) if isinstance(target, KeyHandler) else None
        if isinstance(target, ScrollHandler):
            target.on_scroll()
        return signal
    return None


__all__ = ["dispatch_key", "dispatch_mouse", "focus_path", "hit_path", "widget_at"]
