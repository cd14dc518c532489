"""Composite widget that partitions its region among ordered children."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Mapping, Sequence

from rich.region import Region

from td_canvas.core.bases import BaseWidget, normalize_shift
from td_canvas.core.events import KeyEvent
from td_canvas.core.protocols import Widget, WidgetId
from td_canvas.core.signals import Signal
from td_canvas.errors import WidgetTreeError
from td_canvas.system.layout import Constraint, Direction, partition

if TYPE_CHECKING:
    from td_canvas.config.settings import AppState
    from td_canvas.system.frame import Frame

logger = logging.getLogger(__name__)

ChildEntry = tuple[Widget, Constraint]


class Container(BaseWidget):
    """Holds ``(widget, constraint)`` pairs keyed by widget ID.

    Child regions are recomputed after every change to the container's own
    bounds or to its children, so they are never stale.
    """

    def __init__(
        self,
        widget_id: WidgetId,
        direction: Direction,
        children: Mapping[WidgetId, ChildEntry] | None = None,
        margin: int = 0,
    ) -> None:
        super().__init__(widget_id)
        self.direction = direction
        self.margin = margin
        self._children: dict[WidgetId, ChildEntry] = {}
        if children:
            self._children = self._validated(children)
            self._update_child_bounds()

    @classmethod
    def row(
        cls,
        widget_id: WidgetId,
        children: Mapping[WidgetId, ChildEntry] | None = None,
        margin: int = 0,
    ) -> "Container":
        """Children laid out side by side."""
        return cls(widget_id, Direction.HORIZONTAL, children, margin)

    @classmethod
    def column(
        cls,
        widget_id: WidgetId,
        children: Mapping[WidgetId, ChildEntry] | None = None,
        margin: int = 0,
    ) -> "Container":
        """Children stacked top to bottom."""
        return cls(widget_id, Direction.VERTICAL, children, margin)

    @staticmethod
    def _validated(children: Mapping[WidgetId, ChildEntry]) -> dict[WidgetId, ChildEntry]:
        for key, (child, _constraint) in children.items():
            if key != child.widget_id:
                raise WidgetTreeError(
                    "Child key does not match the child's widget ID",
                    context={"key": key, "widget_id": child.widget_id},
                )
        return dict(children)

    # Children bookkeeping

    def __len__(self) -> int:
        return len(self._children)

    def __contains__(self, widget_id: object) -> bool:
        return widget_id in self._children

    def __iter__(self) -> Iterator[Widget]:
        for child, _constraint in self._children.values():
            yield child

    def children(self) -> list[Widget]:
        return list(self)

    def child(self, widget_id: WidgetId) -> Widget | None:
        entry = self._children.get(widget_id)
        return entry[0] if entry else None

    def constraint(self, widget_id: WidgetId) -> Constraint | None:
        entry = self._children.get(widget_id)
        return entry[1] if entry else None

    def constraints(self) -> list[Constraint]:
        return [constraint for _child, constraint in self._children.values()]

    def add_child(self, widget: Widget, constraint: Constraint) -> None:
        """Append a child; an existing ID is replaced in its original position."""
        self._children[widget.widget_id] = (widget, constraint)
        self._update_child_bounds()

    def remove_child(self, widget_id: WidgetId) -> Widget | None:
        entry = self._children.pop(widget_id, None)
        if entry is None:
            return None
        self._update_child_bounds()
        return entry[0]

    def set_children(self, children: Mapping[WidgetId, ChildEntry]) -> "Container":
        self._children = self._validated(children)
        self._update_child_bounds()
        return self

    def set_constraint(self, widget_id: WidgetId, constraint: Constraint) -> None:
        entry = self._children.get(widget_id)
        if entry is None:
            raise WidgetTreeError(
                "No child with this widget ID", context={"widget_id": widget_id}
            )
        self._children[widget_id] = (entry[0], constraint)
        self._update_child_bounds()

    def update_constraints(self, constraints: Sequence[Constraint]) -> None:
        """Replace every child's constraint, in child order."""
        if len(constraints) != len(self._children):
            raise WidgetTreeError(
                "Constraint count does not match child count",
                context={"constraints": len(constraints), "children": len(self._children)},
            )
        self._children = {
            widget_id: (child, constraint)
            for (widget_id, (child, _old)), constraint in zip(
                self._children.items(), constraints
            )
        }
        self._update_child_bounds()

    def _update_child_bounds(self) -> None:
        regions = partition(
            self.bounds, self.direction, self.margin, self.constraints()
        )
        for (child, _constraint), region in zip(self._children.values(), regions):
            child.set_bounds(region)
        logger.debug(
            "Container %s laid out %d children", self.widget_id, len(regions)
        )

    # Widget

    def set_bounds(self, bounds: Region) -> None:
        super().set_bounds(bounds)
        self._update_child_bounds()

    def draw(self, frame: "Frame", state: "AppState") -> None:
        for child, _constraint in list(self._children.values()):
            child.draw(frame, state)

    # Input

    def on_key(self, event: KeyEvent) -> Signal | None:
        if event.is_bare:
            return None
        if event.is_focus_movement():
            # TODO: move focus to the neighbouring child in event.key's
            # direction, returning None so a parent container can try next.
            return None
        return normalize_shift(self, event)


__all__ = ["ChildEntry", "Container"]
