import pytest

from td_canvas.system.components.table_widths import (
    WidthPlan,
    WidthStrategy,
    compute_widths,
    distribute,
    maximize_column_count,
    maximize_column_info,
)
from td_canvas.system.layout import Length
from td_canvas.system.models import FlexLength, FlexPercentage, TableColumn

pytestmark = pytest.mark.unit_table


def test_info_strategy_all_columns_fit() -> None:
    plan = maximize_column_info([10, 20, 15], 50)
    assert plan.widths == [12, 22, 16]
    assert not plan.leading_indicator
    assert not plan.trailing_indicator
    assert plan.constraints() == [Length(12), Length(22), Length(16)]


def test_info_strategy_overflow_rewalks_accepted_columns() -> None:
    plan = maximize_column_info([10, 20, 15], 30)
    # Only the first column survives the 29-cell re-walk; the overflow
    # indicator takes the last slot and leftover is shared.
    assert plan.trailing_indicator
    assert plan.accepted == 1
    assert plan.widths == [20, 10]
    assert sum(plan.widths) == 30


def test_info_strategy_reserves_scroll_indicator() -> None:
    plan = maximize_column_info([10, 20, 15], 50, scrolled=True)
    assert plan.leading_indicator
    assert plan.widths == [2, 11, 21, 16]
    assert plan.column_widths == [11, 21, 16]


def test_info_strategy_scrolled_and_overflowing() -> None:
    plan = maximize_column_info([10, 20, 15], 32, scrolled=True)
    assert plan.leading_indicator and plan.trailing_indicator
    assert plan.accepted == 2
    assert sum(plan.widths) == 32


@pytest.mark.parametrize(
    "desired,width,expected",
    [
        ([], 50, []),
        ([10], 0, []),
        ([10], 5, [5]),
        ([0, 0], 4, [2, 2]),
    ],
)
def test_info_strategy_degenerate_inputs(desired, width, expected) -> None:
    assert maximize_column_info(desired, width).widths == expected


@pytest.mark.parametrize("width", range(0, 70, 3))
@pytest.mark.parametrize("scrolled", [False, True])
def test_info_strategy_fills_width_exactly(width, scrolled) -> None:
    plan = maximize_column_info([7, 12, 3, 25, 9], width, scrolled=scrolled)
    if plan.widths:
        assert sum(plan.widths) == width
    for width_, floor in zip(plan.column_widths, [7, 12, 3, 25, 9]):
        assert width_ >= floor


def test_distribute_gives_remainder_to_first_slots() -> None:
    assert distribute([1, 1, 1], 5) == [3, 3, 2]
    assert distribute([], 5) == []
    assert distribute([4], 0) == [4]


def test_count_strategy_narrows_columns_to_fit_more(columns) -> None:
    info = compute_widths(WidthStrategy.MAX_COLUMN_INFO, columns, 30)
    count = compute_widths(WidthStrategy.MAX_NUM_COLUMNS, columns, 30)
    assert info.accepted == 1
    assert count.accepted == 3
    assert count.widths == [10, 17, 3]


def test_count_strategy_overflow_indicator(columns) -> None:
    plan = maximize_column_count(columns, 8)
    assert plan.trailing_indicator
    assert plan.widths == [3, 4, 1]


def test_count_strategy_grows_to_upper_bound_first() -> None:
    columns = [
        TableColumn("A", 5, upper_bound=FlexLength(8)),
        TableColumn("B", 5),
        TableColumn("C", 4, upper_bound=FlexPercentage(50)),
    ]
    plan = maximize_column_count(columns, 21)
    # Desired widths use 14 cells, then A grows by 3 and C takes the last 4.
    assert plan.widths == [8, 5, 8]


def test_column_max_width() -> None:
    assert TableColumn("A", 5).max_width(100) == 5
    assert TableColumn("A", 5, FlexLength(3)).max_width(100) == 5
    assert TableColumn("A", 5, FlexLength(9)).max_width(100) == 9
    assert TableColumn("A", 5, FlexPercentage(25)).max_width(100) == 25


def test_empty_plan_has_no_columns() -> None:
    plan = WidthPlan()
    assert plan.accepted == 0
    assert plan.constraints() == []
