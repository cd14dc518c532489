from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box

if TYPE_CHECKING:
    from td_canvas.config.settings import CanvasColours

ACCENT = "blue"

BORDER_STYLE = "grey50"
HIGHLIGHTED_BORDER_STYLE = ACCENT
TEXT_STYLE = "default"
SELECTED_TEXT_STYLE = "black on cyan"
TABLE_HEADER_STYLE = "bold"
SORTED_HEADER_STYLE = "underline"

TABLE_BOX: box.Box = box.SQUARE

SCROLL_LEFT_MARKER = "<"
OVERFLOW_MARKER = ">"

SEARCH_PROMPT = "Search: "
SEARCH_STYLE = "black on grey85"
SORT_MENU_TITLE = "Sort by"


def border_style(colours: "CanvasColours", focused: bool) -> str:
    if focused:
        return colours.highlighted_border_style
    return colours.border_style


def row_highlight_style(colours: "CanvasColours", focused: bool) -> str:
    if focused:
        return colours.currently_selected_text_style
    return colours.text_style
