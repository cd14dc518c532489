from td_canvas.system.components.container import Container
from td_canvas.system.components.search_bar import SearchBar
from td_canvas.system.components.sort_menu import SortMenu
from td_canvas.system.components.table import TextTable
from td_canvas.system.components.table_scroll import ScrollDirection
from td_canvas.system.components.table_widths import WidthPlan, WidthStrategy

__all__ = [
    "Container",
    "ScrollDirection",
    "SearchBar",
    "SortMenu",
    "TextTable",
    "WidthPlan",
    "WidthStrategy",
]
