import pytest
from prompt_toolkit.data_structures import Point
from prompt_toolkit.mouse_events import MouseButton, MouseEvent, MouseEventType
from rich.region import Region

from td_canvas.core.bases import BaseWidget
from td_canvas.core.events import KeyEvent, Modifiers
from td_canvas.core.signals import Signal
from td_canvas.system.components.container import Container
from td_canvas.system.dispatch import dispatch_key, dispatch_mouse, focus_path, widget_at
from td_canvas.system.layout import Length, Min
from td_canvas.widgets.scroll_search_table import ScrollSearchTable

pytestmark = pytest.mark.unit_widgets

FOCUS_LEFT = KeyEvent("left", Modifiers.CONTROL | Modifiers.SHIFT)


class _Recorder(BaseWidget):
    def __init__(self, widget_id: int, reply: Signal | None = None) -> None:
        super().__init__(widget_id)
        self.reply = reply
        self.keys: list[KeyEvent] = []
        self.clicks: list[tuple[str, int, int]] = []
        self.scrolls = 0

    def draw(self, frame, state) -> None:
        frame.render(str(self.widget_id), self.bounds)

    def on_key(self, event: KeyEvent) -> Signal | None:
        self.keys.append(event)
        return self.reply

    def on_scroll(self) -> Signal | None:
        self.scrolls += 1
        return None

    def on_left_click(self, x: int, y: int) -> Signal | None:
        self.clicks.append(("left", x, y))
        return self.reply

    def on_right_click(self, x: int, y: int) -> Signal | None:
        self.clicks.append(("right", x, y))
        return None


def _mouse(x: int, y: int, event_type: MouseEventType, button: MouseButton) -> MouseEvent:
    return MouseEvent(Point(x, y), event_type, button, frozenset())


@pytest.fixture
def tree():
    leaf = _Recorder(3)
    sibling = _Recorder(4)
    inner = Container.column(2, {3: (leaf, Min(1)), 4: (sibling, Length(2))})
    side = _Recorder(5)
    root = Container.row(1, {5: (side, Length(10)), 2: (inner, Min(1))})
    root.set_bounds(Region(0, 0, 30, 10))
    return root, inner, leaf, sibling, side


def test_focus_path_walks_containers(tree) -> None:
    root, inner, leaf, _sibling, side = tree
    assert focus_path(root, 3) == [root, inner, leaf]
    assert focus_path(root, 5) == [root, side]
    assert focus_path(root, 1) == [root]
    assert focus_path(root, 99) == []


def test_widget_at_returns_innermost(tree) -> None:
    root, _inner, leaf, sibling, side = tree
    assert widget_at(root, 2, 2) is side
    assert widget_at(root, 12, 2) is leaf
    assert widget_at(root, 12, 9) is sibling
    assert widget_at(root, 40, 2) is None


def test_key_goes_to_focused_widget_only(tree) -> None:
    root, inner, leaf, _sibling, side = tree
    assert dispatch_key(focus_path(root, 3), KeyEvent("j")) is None
    assert leaf.keys == [KeyEvent("j")]
    assert side.keys == []


def test_unhandled_focus_movement_bubbles_to_ancestors() -> None:
    leaf = _Recorder(3)
    middle = _Recorder(2, reply=Signal.no_op())
    outer = _Recorder(1, reply=Signal.open_sort())
    assert dispatch_key([outer, middle, leaf], FOCUS_LEFT) == Signal.no_op()
    assert leaf.keys == [FOCUS_LEFT]
    assert middle.keys == [FOCUS_LEFT]
    assert outer.keys == []


def test_other_unhandled_keys_do_not_bubble() -> None:
    leaf = _Recorder(3)
    outer = _Recorder(1, reply=Signal.open_sort())
    assert dispatch_key([outer, leaf], KeyEvent("x")) is None
    assert outer.keys == []


def test_focus_movement_dropped_at_root(tree) -> None:
    root, *_ = tree
    assert dispatch_key(focus_path(root, 3), FOCUS_LEFT) is None
    assert dispatch_key([], FOCUS_LEFT) is None


def test_mouse_buttons_reach_click_handlers(tree) -> None:
    root, _inner, leaf, _sibling, side = tree
    dispatch_mouse(root, _mouse(12, 2, MouseEventType.MOUSE_DOWN, MouseButton.LEFT))
    dispatch_mouse(root, _mouse(1, 1, MouseEventType.MOUSE_DOWN, MouseButton.RIGHT))
    dispatch_mouse(root, _mouse(1, 1, MouseEventType.MOUSE_UP, MouseButton.LEFT))
    assert leaf.clicks == [("left", 12, 2)]
    assert side.clicks == [("right", 1, 1)]
    assert dispatch_mouse(root, _mouse(50, 1, MouseEventType.MOUSE_DOWN, MouseButton.LEFT)) is None


def test_wheel_moves_and_rescrolls(tree) -> None:
    root, _inner, leaf, *_ = tree
    dispatch_mouse(root, _mouse(12, 2, MouseEventType.SCROLL_DOWN, MouseButton.NONE))
    dispatch_mouse(root, _mouse(12, 2, MouseEventType.SCROLL_UP, MouseButton.NONE))
    assert leaf.keys == [KeyEvent("down"), KeyEvent("up")]
    assert leaf.scrolls == 2


def test_mouse_reaches_table_inside_widget(columns, rows) -> None:
    widget = ScrollSearchTable(10, columns, rows)
    root = Container.row(1, {10: (widget, Min(1))})
    root.set_bounds(Region(0, 0, 52, 10))

    header = _mouse(14, 1, MouseEventType.MOUSE_DOWN, MouseButton.LEFT)
    assert dispatch_mouse(root, header) == Signal.select_column(1)

    dispatch_mouse(root, _mouse(5, 5, MouseEventType.SCROLL_DOWN, MouseButton.NONE))
    assert widget.table.current_position == 1
    assert (widget.table.start_index, widget.table.end_index) == (0, 6)


@pytest.fixture
def nested(columns, rows):
    widget = ScrollSearchTable(10, columns, rows)
    root = Container.row(1, {10: (widget, Min(1))})
    root.set_bounds(Region(0, 0, 60, 20))
    return root, widget


def test_focus_path_enters_scroll_search_table(nested) -> None:
    root, widget = nested
    assert focus_path(root, 10) == [root, widget]
    assert focus_path(root, widget.table.widget_id) == [root, widget, widget.table]
    assert widget_at(root, 14, 1) is widget.table


def test_keys_for_inner_parts_go_through_the_widget(nested) -> None:
    root, widget = nested
    dispatch_key(focus_path(root, widget.focused_widget_id()), KeyEvent("j"))
    assert widget.table.current_position == 1

    dispatch_key(focus_path(root, widget.focused_widget_id()), KeyEvent("/"))
    path = focus_path(root, widget.focused_widget_id())
    assert path[-1] is widget.search_bar
    assert path[:2] == [root, widget]

    dispatch_key(path, KeyEvent("a"))
    assert widget.search_query == "a"
    dispatch_key(path, KeyEvent("escape"))
    assert not widget.is_search_open
    assert widget.search_query == ""


def test_sort_menu_click_goes_through_the_widget(nested) -> None:
    root, widget = nested
    dispatch_key(focus_path(root, widget.table.widget_id), KeyEvent("f6"))
    click = _mouse(2, 2, MouseEventType.MOUSE_DOWN, MouseButton.LEFT)
    assert dispatch_mouse(root, click) == Signal.select_column(1)
    assert not widget.is_sort_open
