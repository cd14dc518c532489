import pytest
from rich.region import Region

from td_canvas.core.bases import BaseWidget
from td_canvas.core.events import KeyEvent, Modifiers
from td_canvas.errors import WidgetTreeError
from td_canvas.system.components.container import Container
from td_canvas.system.frame import RecordingFrame
from td_canvas.system.layout import Direction, Length, Min

pytestmark = pytest.mark.unit_layout


class _Box(BaseWidget):
    def __init__(self, widget_id: int, draw_log: list[int] | None = None) -> None:
        super().__init__(widget_id)
        self.bounds_history: list[Region] = []
        self._draw_log = draw_log if draw_log is not None else []

    def set_bounds(self, bounds: Region) -> None:
        super().set_bounds(bounds)
        self.bounds_history.append(bounds)

    def draw(self, frame, state) -> None:
        self._draw_log.append(self.widget_id)
        frame.render(f"box {self.widget_id}", self.bounds)


def test_add_child_repartitions_immediately() -> None:
    container = Container.row(1)
    container.set_bounds(Region(0, 0, 30, 4))
    left, right = _Box(2), _Box(3)

    container.add_child(left, Min(1))
    assert left.bounds == Region(0, 0, 30, 4)

    container.add_child(right, Length(10))
    assert left.bounds == Region(0, 0, 20, 4)
    assert right.bounds == Region(20, 0, 10, 4)


def test_duplicate_id_replaces_in_place() -> None:
    container = Container.column(1)
    container.set_bounds(Region(0, 0, 10, 10))
    first, second, third = _Box(2), _Box(3), _Box(4)
    container.add_child(first, Length(2))
    container.add_child(second, Min(1))
    container.add_child(third, Length(3))

    replacement = _Box(2)
    container.add_child(replacement, Length(5))

    assert [child.widget_id for child in container] == [2, 3, 4]
    assert container.child(2) is replacement
    assert replacement.bounds == Region(0, 0, 10, 5)
    assert second.bounds == Region(0, 5, 10, 2)


def test_set_bounds_updates_every_child() -> None:
    a, b = _Box(2), _Box(3)
    container = Container(1, Direction.HORIZONTAL, {2: (a, Min(1)), 3: (b, Min(1))})
    container.set_bounds(Region(5, 5, 10, 2))
    assert a.bounds == Region(5, 5, 5, 2)
    assert b.bounds == Region(10, 5, 5, 2)


def test_set_children_replaces_and_returns_container() -> None:
    old = _Box(2)
    container = Container.row(1)
    container.add_child(old, Min(1))
    container.set_bounds(Region(0, 0, 8, 1))

    new = _Box(5)
    assert container.set_children({5: (new, Min(1))}) is container
    assert 2 not in container
    assert len(container) == 1
    assert new.bounds == Region(0, 0, 8, 1)


def test_set_children_rejects_mismatched_keys() -> None:
    container = Container.row(1)
    with pytest.raises(WidgetTreeError) as excinfo:
        container.set_children({7: (_Box(8), Min(1))})
    assert excinfo.value.context == {"key": 7, "widget_id": 8}


def test_set_constraint_keeps_child_and_relayouts() -> None:
    container = Container.row(1)
    container.set_bounds(Region(0, 0, 20, 1))
    a, b = _Box(2), _Box(3)
    container.add_child(a, Length(5))
    container.add_child(b, Min(1))

    container.set_constraint(2, Length(12))

    assert container.child(2) is a
    assert container.constraint(2) == Length(12)
    assert b.bounds == Region(12, 0, 8, 1)
    with pytest.raises(WidgetTreeError):
        container.set_constraint(99, Min(1))


def test_update_constraints_positional() -> None:
    container = Container.row(1)
    container.set_bounds(Region(0, 0, 20, 1))
    a, b = _Box(2), _Box(3)
    container.add_child(a, Min(1))
    container.add_child(b, Min(1))

    container.update_constraints([Length(4), Min(1)])
    assert container.constraints() == [Length(4), Min(1)]
    assert a.bounds == Region(0, 0, 4, 1)
    with pytest.raises(WidgetTreeError):
        container.update_constraints([Min(1)])


def test_remove_child_relayouts_remaining() -> None:
    container = Container.row(1)
    container.set_bounds(Region(0, 0, 10, 1))
    a, b = _Box(2), _Box(3)
    container.add_child(a, Min(1))
    container.add_child(b, Min(1))

    assert container.remove_child(3) is b
    assert container.remove_child(3) is None
    assert a.bounds == Region(0, 0, 10, 1)


def test_draw_visits_children_in_insertion_order(state) -> None:
    log: list[int] = []
    container = Container.column(1)
    for widget_id in (4, 2, 3):
        container.add_child(_Box(widget_id, log), Min(1))
    container.set_bounds(Region(0, 0, 10, 9))

    frame = RecordingFrame()
    container.draw(frame, state)

    assert log == [4, 2, 3]
    assert frame.regions() == [Region(0, 0, 10, 3), Region(0, 3, 10, 3), Region(0, 6, 10, 3)]


def test_nested_containers_stay_inside_parent() -> None:
    inner = Container.column(2)
    leaf_a, leaf_b = _Box(3), _Box(4)
    inner.add_child(leaf_a, Min(1))
    inner.add_child(leaf_b, Length(2))
    outer = Container.row(1, margin=1)
    outer.add_child(_Box(5), Length(6))
    outer.add_child(inner, Min(1))

    outer.set_bounds(Region(0, 0, 30, 10))

    assert inner.bounds == Region(7, 0, 22, 10)
    assert leaf_a.bounds == Region(7, 0, 22, 8)
    assert leaf_b.bounds == Region(7, 8, 22, 2)


def test_container_input_handlers_pass_through() -> None:
    container = Container.row(1)
    container.set_bounds(Region(0, 0, 10, 10))
    assert container.on_key(KeyEvent("left", Modifiers.CONTROL | Modifiers.SHIFT)) is None
    assert container.on_key(KeyEvent("G", Modifiers.SHIFT)) is None
    assert container.on_key(KeyEvent("x")) is None
    assert container.on_left_click(1, 1) is None
    assert container.on_scroll() is None
    assert container.is_hit(9, 9)
    assert not container.is_hit(10, 0)


def test_base_widget_requires_draw() -> None:
    with pytest.raises(TypeError):
        BaseWidget(1)
