"""Rendering sinks that widgets draw into once per frame."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Protocol

from rich.console import Console, ConsoleOptions, RenderableType, RenderResult
from rich.region import Region
from rich.segment import Segment


class Frame(Protocol):
    def render(self, renderable: RenderableType, region: Region) -> None: ...


class ConsoleFrame:
    """Composes widget renders into one screen-sized rich renderable.

    Each region is rendered independently with ``Console.render_lines``;
    printing the frame (``console.print(frame)`` or a ``Live`` update) stitches
    the rows back together from left to right.
    """

    def __init__(
        self,
        console: Console,
        width: int | None = None,
        height: int | None = None,
    ) -> None:
        self.console = console
        self.width = width if width is not None else console.width
        self.height = height if height is not None else console.height
        self._rendered: dict[Region, list[list[Segment]]] = {}

    @property
    def screen(self) -> Region:
        return Region(0, 0, self.width, self.height)

    def clear(self) -> None:
        self._rendered.clear()

    def render(self, renderable: RenderableType, region: Region) -> None:
        if region.width <= 0 or region.height <= 0:
            return
        options = self.console.options.update_dimensions(region.width, region.height)
        self._rendered[region] = self.console.render_lines(
            renderable, options, pad=True
        )

    def _row(self, y: int) -> list[Segment]:
        pieces = sorted(
            (
                (region.x, lines[y - region.y])
                for region, lines in self._rendered.items()
                if region.y <= y < region.y + region.height and y - region.y < len(lines)
            ),
            key=lambda piece: piece[0],
        )
        row: list[Segment] = []
        cursor = 0
        for x, line in pieces:
            if x < cursor:
                continue
            if x > cursor:
                row.append(Segment(" " * (x - cursor)))
            row.extend(line)
            cursor = x + Segment.get_line_length(line)
        return Segment.adjust_line_length(row, self.width)

    def rows(self) -> Iterator[list[Segment]]:
        for y in range(self.height):
            yield self._row(y)

    def plain_lines(self) -> list[str]:
        """The frame as plain text, one string per terminal row."""
        return ["".join(segment.text for segment in row) for row in self.rows()]

    def __rich_console__(
        self, console: Console, options: ConsoleOptions
    ) -> RenderResult:
        new_line = Segment.line()
        for row in self.rows():
            yield from row
            yield new_line


@dataclass
class RecordedRender:
    renderable: RenderableType
    region: Region


@dataclass
class RecordingFrame:
    """Headless sink that keeps every render call for inspection."""

    calls: list[RecordedRender] = field(default_factory=list)

    def render(self, renderable: RenderableType, region: Region) -> None:
        self.calls.append(RecordedRender(renderable, region))

    def regions(self) -> list[Region]:
        return [call.region for call in self.calls]


__all__ = ["ConsoleFrame", "Frame", "RecordedRender", "RecordingFrame"]
