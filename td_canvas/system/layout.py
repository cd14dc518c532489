"""Layout weights and the rectangle partitioner used by containers.

The space itself is divided by rich's layout splitters; this module only
turns each weight into the size/ratio/minimum edge rich expects and keeps the
result inside the parent region.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from rich.layout import ColumnSplitter, RowSplitter, Splitter
from rich.region import Region

from td_canvas.errors import ConstraintError

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    HORIZONTAL = "horizontal"  # children side by side
    VERTICAL = "vertical"  # children stacked


def _require_non_negative(kind: str, **values: int) -> None:
    for key, value in values.items():
        if value < 0:
            raise ConstraintError(
                f"{kind} {key} must be non-negative", context={key: value}
            )


@dataclass(frozen=True)
class Length:
    length: int

    def __post_init__(self) -> None:
        _require_non_negative("Length", length=self.length)


@dataclass(frozen=True)
class Percentage:
    percent: int

    def __post_init__(self) -> None:
        if not 0 <= self.percent <= 100:
            raise ConstraintError(
                "Percentage must be between 0 and 100",
                context={"percent": self.percent},
            )


@dataclass(frozen=True)
class Min:
    length: int

    def __post_init__(self) -> None:
        _require_non_negative("Min", length=self.length)


@dataclass(frozen=True)
class Max:
    length: int

    def __post_init__(self) -> None:
        _require_non_negative("Max", length=self.length)


@dataclass(frozen=True)
class Ratio:
    """A fraction of the available length."""

    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        _require_non_negative(
            "Ratio", numerator=self.numerator, denominator=self.denominator
        )
        if self.denominator == 0:
            raise ConstraintError("Ratio denominator must not be zero")


Constraint = Union[Length, Percentage, Min, Max, Ratio]


@dataclass(frozen=True)
class _Edge:
    # Same attributes as rich.layout.Layout, which is what the splitters read.
    size: int | None
    ratio: int = 1
    minimum_size: int = 1


def _edge(constraint: Constraint, available: int) -> _Edge:
    if isinstance(constraint, Length):
        return _Edge(size=constraint.length)
    if isinstance(constraint, Percentage):
        return _Edge(size=available * constraint.percent // 100)
    if isinstance(constraint, Ratio):
        return _Edge(size=available * constraint.numerator // constraint.denominator)
    if isinstance(constraint, Max):
        return _Edge(size=min(constraint.length, available))
    if isinstance(constraint, Min):
        return _Edge(size=None, ratio=1, minimum_size=constraint.length)
    raise ConstraintError(
        "Unknown layout constraint", context={"constraint": repr(constraint)}
    )


def _shrink(region: Region, direction: Direction, margin: int) -> Region:
    x, y, width, height = region
    if direction is Direction.HORIZONTAL:
        inset = min(margin, width // 2)
        return Region(x + inset, y, width - 2 * inset, height)
    inset = min(margin, height // 2)
    return Region(x, y + inset, width, height - 2 * inset)


def _clip(child: Region, parent: Region, direction: Direction) -> Region:
    if direction is Direction.HORIZONTAL:
        end = parent.x + parent.width
        start = min(child.x, end)
        stop = min(child.x + child.width, end)
        return Region(start, parent.y, max(0, stop - start), parent.height)
    end = parent.y + parent.height
    start = min(child.y, end)
    stop = min(child.y + child.height, end)
    return Region(parent.x, start, parent.width, max(0, stop - start))


def _stretch_to_end(child: Region, parent: Region, direction: Direction) -> Region:
    if direction is Direction.HORIZONTAL:
        return Region(child.x, child.y, parent.x + parent.width - child.x, child.height)
    return Region(child.x, child.y, child.width, parent.y + parent.height - child.y)


def _splitter(direction: Direction) -> Splitter:
    if direction is Direction.HORIZONTAL:
        return RowSplitter()
    return ColumnSplitter()


def partition(
    region: Region,
    direction: Direction,
    margin: int,
    constraints: Sequence[Constraint],
) -> list[Region]:
    """Split ``region`` along ``direction`` into one region per constraint.

    Regions come back in constraint order. When fixed sizes add up to more
    than the available space, trailing regions are cut at the parent's edge
    (possibly to zero length). When they add up to less, the last region
    is stretched to the parent's edge so the regions always tile it.
    """
    if not constraints:
        return []
    inner = _shrink(region, direction, margin)
    available = inner.width if direction is Direction.HORIZONTAL else inner.height
    edges = [_edge(constraint, available) for constraint in constraints]

    # rich treats a zero size as "flexible", so zero-length edges are placed
    # by hand at the current offset.
    sized = [edge for edge in edges if edge.size != 0]
    divided = iter(region for _, region in _splitter(direction).divide(sized, inner))

    regions: list[Region] = []
    cursor = inner.x if direction is Direction.HORIZONTAL else inner.y
    for edge in edges:
        if edge.size == 0:
            if direction is Direction.HORIZONTAL:
                child = Region(cursor, inner.y, 0, inner.height)
            else:
                child = Region(inner.x, cursor, inner.width, 0)
        else:
            child = next(divided)
        if direction is Direction.HORIZONTAL:
            cursor = child.x + child.width
        else:
            cursor = child.y + child.height
        regions.append(_clip(child, inner, direction))

    # Fixed sizes that fall short of the available length leave the rest to
    # the last child.
    regions[-1] = _stretch_to_end(regions[-1], inner, direction)

    logger.debug(
        "Partitioned %s %s into %s", direction.value, tuple(region), [tuple(r) for r in regions]
    )
    return regions


__all__ = [
    "Constraint",
    "Direction",
    "Length",
    "Max",
    "Min",
    "Percentage",
    "Ratio",
    "partition",
]
