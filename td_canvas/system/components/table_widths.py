"""Column width strategies for :class:`TextTable`.

Both strategies work on the columns that are actually on screen (hidden
columns and columns scrolled past are dropped beforehand) and return a
:class:`WidthPlan` whose widths add up to the available width exactly,
unless nothing can be shown at all.

Indicator cells: when the table is scrolled horizontally one leading cell
marks the columns scrolled past; when not every column fits one trailing cell
marks the overflow. Leftover space is spread over every slot, indicators
included.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from td_canvas.system.layout import Length
from td_canvas.system.models import TableColumn
from td_canvas.system.text import grapheme_count


class WidthStrategy(str, Enum):
    MAX_NUM_COLUMNS = "max_num_columns"
    MAX_COLUMN_INFO = "max_column_info"


@dataclass(frozen=True)
class WidthPlan:
    widths: list[int] = field(default_factory=list)
    leading_indicator: bool = False
    trailing_indicator: bool = False

    @property
    def column_widths(self) -> list[int]:
        """Widths of the real columns, indicator cells excluded."""
        start = 1 if self.leading_indicator else 0
        stop = len(self.widths) - (1 if self.trailing_indicator else 0)
        return self.widths[start:stop]

    @property
    def accepted(self) -> int:
        return len(self.column_widths)

    def constraints(self) -> list[Length]:
        return [Length(width) for width in self.widths]


def _fit(widths: Sequence[int], budget: int) -> tuple[list[int], int, bool]:
    """Accept widths in order while they fit; report whether one did not."""
    accepted: list[int] = []
    for width in widths:
        if budget < width:
            return accepted, budget, True
        budget -= width
        accepted.append(width)
    return accepted, budget, False


def distribute(widths: Sequence[int], leftover: int) -> list[int]:
    """Spread ``leftover`` evenly, extra cells going to the first slots."""
    if not widths:
        return []
    per_slot, remainder = divmod(max(0, leftover), len(widths))
    return [
        width + per_slot + (1 if index < remainder else 0)
        for index, width in enumerate(widths)
    ]


def _plan(
    accepted: list[int], budget: int, leading: bool, trailing: bool
) -> WidthPlan:
    slots = [1] * leading + accepted + [1] * trailing
    return WidthPlan(distribute(slots, budget), leading, trailing)


def maximize_column_info(
    desired: Sequence[int], total_width: int, scrolled: bool = False
) -> WidthPlan:
    """Greedy strategy: show columns at their full desired width.

    Columns are taken in order until one does not fit. In that case one more
    cell is set aside for the overflow indicator and only the columns already
    accepted are walked again against the reduced width.
    """
    total_width = max(0, total_width)
    leading = scrolled and total_width > 0
    budget = total_width - int(leading)

    accepted, budget, bailed = _fit(desired, budget)
    trailing = False
    if bailed:
        trailing = total_width - int(leading) > 0
        budget = max(0, total_width - int(leading) - int(trailing))
        accepted, budget, _ = _fit(accepted, budget)
    return _plan(accepted, budget, leading, trailing)


def _minimum_width(column: TableColumn) -> int:
    return max(1, min(grapheme_count(column.header), column.desired_width))


def maximize_column_count(
    columns: Sequence[TableColumn], total_width: int, scrolled: bool = False
) -> WidthPlan:
    """Fit as many columns as possible, narrowing them if needed.

    Every column may shrink to its header length. Once the set of columns is
    fixed, each one grows back towards its desired width and then towards its
    flexible upper bound, in column order.
    """
    total_width = max(0, total_width)
    leading = scrolled and total_width > 0
    budget = total_width - int(leading)

    floors = [_minimum_width(column) for column in columns]
    accepted, budget, bailed = _fit(floors, budget)
    trailing = False
    if bailed:
        trailing = total_width - int(leading) > 0
        budget = max(0, total_width - int(leading) - int(trailing))
        accepted, budget, _ = _fit(accepted, budget)

    widths = list(accepted)
    for index, column in enumerate(columns[: len(widths)]):
        grow = min(max(0, column.desired_width - widths[index]), budget)
        widths[index] += grow
        budget -= grow
    for index, column in enumerate(columns[: len(widths)]):
        grow = min(max(0, column.max_width(total_width) - widths[index]), budget)
        widths[index] += grow
        budget -= grow
    return _plan(widths, budget, leading, trailing)


def compute_widths(
    strategy: WidthStrategy,
    columns: Sequence[TableColumn],
    total_width: int,
    scrolled: bool = False,
) -> WidthPlan:
    if strategy is WidthStrategy.MAX_NUM_COLUMNS:
        return maximize_column_count(columns, total_width, scrolled)
    return maximize_column_info(
        [column.desired_width for column in columns], total_width, scrolled
    )


__all__ = [
    "WidthPlan",
    "WidthStrategy",
    "compute_widths",
    "distribute",
    "maximize_column_count",
    "maximize_column_info",
]
