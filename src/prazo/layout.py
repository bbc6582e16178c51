"""Per-project geometry: bar placement, elapsed-time overlay and markers.

All functions take the grid and a ``today`` sampled once by the caller, so a
bar, its overlay and its markers always agree on which day is today.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from .config import MarkerConfig, WindowConfig
from .dates import add_days, days_between
from .logger import debug_enabled, get_logger, placement_enabled
from .models import Project
from .pipeline import has_active_deadline
from .window import DayGrid

DAYS_PER_WEEK = 7
PROGRESS_MIN = 0.0
PROGRESS_MAX = 100.0


@dataclass(frozen=True, slots=True)
class BarPlacement:
    """Column span of a project bar; always inside the grid."""

    start_column: int
    duration: int

    @property
    def end_column(self) -> int:
        """Last column covered by the bar (inclusive)."""
        return self.start_column + self.duration - 1


def effective_start(project: Project, grid_start: date) -> date:
    """Creation date, or the grid's first day if missing or earlier."""
    created = project.created_day
    if created is None or created < grid_start:
        return grid_start
    return created


def effective_end(
    project: Project, start: date, *, config: WindowConfig | None = None
) -> date:
    """Deadline, or a status-based estimate counted from ``start``."""
    deadline = project.deadline_day
    if deadline is not None:
        return deadline
    config = config or WindowConfig()
    return add_days(start, config.weeks_for(project.status) * DAYS_PER_WEEK)


def position_bar(
    project: Project, grid: DayGrid, *, config: WindowConfig | None = None
) -> BarPlacement:
    """Map a project's effective dates onto grid columns.

    After clamping into the grid, a bar whose start lies inside the window
    (column > 0) is stretched back to column 0 so every visible project reads
    as running since tracking began.

    Args:
        project: The project to place
        grid: The day grid
        config: Window settings used for the no-deadline estimate

    Returns:
        Placement with ``0 <= start_column < len(grid)``, ``duration >= 1``
        and ``start_column + duration <= len(grid)``
    """
    grid_length = len(grid)
    start = effective_start(project, grid.first_day)
    end = effective_end(project, start, config=config)

    start_column = max(0, grid.column_of(start))
    end_column = max(0, grid.column_of(end))
    duration = max(1, end_column - start_column + 1)

    start_column = min(start_column, grid_length - 1)
    duration = min(duration, grid_length - start_column)

    if start_column > 0:
        if placement_enabled():
            get_logger().placement(
                f"Left-filling {project.id}: start column {start_column} moved to 0"
            )
        start_column = 0
        duration = min(end_column + 1, grid_length)

    return BarPlacement(start_column=start_column, duration=duration)


def temporal_progress(project: Project, grid_start: date, *, today: date) -> float:
    """Share (0-100) of the project's start-to-deadline span already elapsed.

    Rules, first match wins:
    1. No deadline: 0
    2. Completed or Finished: 100
    3. Deadline before today (overdue): 100
    4. Deadline before the effective start: 100
    5. Start equals deadline: 100 once today reaches the deadline, else 0
    6. Otherwise elapsed days over total days, where elapsed is counted to
       ``max(today, start + 1 day)`` so the first day already shows progress
    """
    deadline = project.deadline_day
    if deadline is None:
        return PROGRESS_MIN
    if project.status.is_closed:
        return PROGRESS_MAX
    if deadline < today:
        return PROGRESS_MAX

    start = effective_start(project, grid_start)
    if deadline < start:
        return PROGRESS_MAX

    total = days_between(start, deadline)
    if total == 0:
        return PROGRESS_MAX if today >= deadline else PROGRESS_MIN

    reference = max(today, add_days(start, 1))
    elapsed = days_between(start, reference)
    return min(PROGRESS_MAX, max(PROGRESS_MIN, elapsed / total * 100))


def is_overdue(project: Project, *, today: date) -> bool:
    """An open project whose deadline has passed."""
    deadline = project.deadline_day
    return has_active_deadline(project) and deadline is not None and deadline < today


class MarkerKind(str, Enum):
    """Checkpoint types drawn as glyphs on a project row."""

    MAINTENANCE = "maintenance"
    REPORT = "report"


@dataclass(frozen=True, slots=True)
class MarkerPlacement:
    """A visible checkpoint glyph."""

    kind: MarkerKind
    day: date
    column: int
    offset_px: int
    is_overdue: bool


def position_markers(
    project: Project,
    grid: DayGrid,
    *,
    today: date,
    config: MarkerConfig | None = None,
) -> list[MarkerPlacement]:
    """Place maintenance and report markers on the grid.

    Markers outside the grid are omitted. When both land in the same column
    they are nudged apart symmetrically (maintenance left, report right).
    """
    config = config or MarkerConfig()

    candidates = [
        (MarkerKind.MAINTENANCE, project.maintenance_day),
        (MarkerKind.REPORT, project.report_day),
    ]
    visible: list[tuple[MarkerKind, date, int]] = []
    for kind, day in candidates:
        if day is None:
            continue
        column = grid.column_of(day)
        if grid.contains_column(column):
            visible.append((kind, day, column))
        elif debug_enabled():
            get_logger().debug(f"{kind.value} marker for {project.id} at {day} is off-grid")

    collide = len(visible) == 2 and visible[0][2] == visible[1][2]  # noqa: PLR2004 - the pair

    markers: list[MarkerPlacement] = []
    for kind, day, column in visible:
        offset = 0
        if collide:
            offset = (
                -config.collision_offset_px
                if kind is MarkerKind.MAINTENANCE
                else config.collision_offset_px
            )
        markers.append(
            MarkerPlacement(
                kind=kind, day=day, column=column, offset_px=offset, is_overdue=day < today
            )
        )
    return markers
