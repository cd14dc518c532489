from td_canvas.widgets.scroll_search_table import ScrollSearchTable

__all__ = ["ScrollSearchTable"]
