from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ScrollDirection(str, Enum):
    UP = "up"  # towards lower indices
    DOWN = "down"  # towards higher indices


@dataclass
class VerticalScrollState:
    current_position: int = 0
    previous_position: int = 0
    scroll_direction: ScrollDirection = ScrollDirection.DOWN

    def move_up(self, amount: int = 1) -> None:
        self.current_position = max(0, self.current_position - amount)
        self.scroll_direction = ScrollDirection.UP

    def move_down(self, row_count: int, amount: int = 1) -> None:
        last = max(0, row_count - 1)
        self.current_position = min(last, self.current_position + amount)
        self.scroll_direction = ScrollDirection.DOWN

    def jump_to_start(self) -> None:
        self.current_position = 0
        self.scroll_direction = ScrollDirection.UP

    def jump_to_end(self, row_count: int) -> None:
        self.current_position = max(0, row_count - 1)
        self.scroll_direction = ScrollDirection.DOWN

    def select(self, row: int) -> None:
        if row >= self.current_position:
            self.scroll_direction = ScrollDirection.DOWN
        else:
            self.scroll_direction = ScrollDirection.UP
        self.current_position = row

    def clamp(self, row_count: int) -> None:
        self.current_position = min(self.current_position, max(0, row_count - 1))

    def window(self, num_visible_rows: int) -> tuple[int, int]:
        """Return ``(start_index, end_index)`` of the rows to show.

        The window only moves when the selected row would leave it, and then
        just far enough to bring the row back to the edge it crossed.
        """
        current = self.current_position
        previous = self.previous_position
        if num_visible_rows <= 0:
            return current, current

        if self.scroll_direction is ScrollDirection.DOWN:
            if previous <= current < previous + num_visible_rows:
                pass
            elif current >= num_visible_rows:
                previous = current - num_visible_rows + 1
            else:
                previous = 0
        else:
            if current <= previous:
                previous = current
            elif current >= previous + num_visible_rows:
                previous = current - num_visible_rows + 1

        self.previous_position = previous
        return previous, previous + num_visible_rows


@dataclass
class HorizontalScrollState:
    offset_multiplier: int = 0

    def scroll_left(self) -> None:
        self.offset_multiplier = max(0, self.offset_multiplier - 1)

    def scroll_right(self, column_count: int) -> None:
        if self.offset_multiplier + 1 < column_count:
            self.offset_multiplier += 1

    def clamp(self, column_count: int) -> None:
        self.offset_multiplier = min(self.offset_multiplier, max(0, column_count - 1))


__all__ = ["HorizontalScrollState", "ScrollDirection", "VerticalScrollState"]
