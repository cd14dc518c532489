from collections import defaultdict

import pytest
from rich.console import Console
from rich.region import Region
from rich.table import Table

from td_canvas.config.settings import AppState
from td_canvas.system.frame import RecordingFrame
from td_canvas.system.models import TableColumn

KNOWN_MARKERS = {"unit_common", "unit_layout", "unit_table", "unit_widgets"}


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print statistics by marker at the end of the test session."""
    _ = (exitstatus, config)
    marker_stats = defaultdict(
        lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0}
    )

    for outcome in ["passed", "failed", "skipped"]:
        for report in terminalreporter.stats.get(outcome, []):
            if report.when == "call" or (report.when == "setup" and report.outcome == "skipped"):
                duration = getattr(report, "duration", 0.0)
                for marker in KNOWN_MARKERS:
                    if marker in report.keywords:
                        stats = marker_stats[marker]
                        stats[outcome] += 1
                        stats["total"] += 1
                        stats["duration"] += duration

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
            f"{stats['duration']:.2f}",
        )

    console = Console()
    console.print("\n")
    console.print(table)


@pytest.fixture
def columns() -> list[TableColumn]:
    return [
        TableColumn("PID", 10),
        TableColumn("Name", 20),
        TableColumn("CPU", 15),
    ]


@pytest.fixture
def rows() -> list[list[str]]:
    return [[f"r{i}", f"proc-{i}", f"{i}.0"] for i in range(50)]


@pytest.fixture
def state() -> AppState:
    return AppState()


@pytest.fixture
def frame() -> RecordingFrame:
    return RecordingFrame()


@pytest.fixture
def table_region() -> Region:
    # 50 inner columns; 10 rows leave 6 data rows below the header and gap.
    return Region(0, 0, 52, 10)
