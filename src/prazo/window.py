"""Visible window calculation and day-grid generation.

The window always contains today, never reaches further back than the
configured lookback, and extends a few days past the latest tracked date.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import date

from .config import WindowConfig
from .dates import add_days, days_between, earliest, latest
from .logger import debug_enabled, get_logger
from .models import Category, Project
from .pipeline import is_timeline_eligible

MONTH_ABBREVIATIONS = (
    "JAN", "FEV", "MAR", "ABR", "MAI", "JUN", "JUL", "AGO", "SET", "OUT", "NOV", "DEZ",
)  # fmt: skip
WEEKDAY_ABBREVIATIONS = ("SEG", "TER", "QUA", "QUI", "SEX", "SÁB", "DOM")  # Monday first


@dataclass(frozen=True, slots=True)
class DayDescriptor:
    """One column of the day grid."""

    day: date
    index: int

    @property
    def month_label(self) -> str:
        return MONTH_ABBREVIATIONS[self.day.month - 1]

    @property
    def day_label(self) -> str:
        return f"{self.day.day:02d}"

    @property
    def weekday_label(self) -> str:
        return WEEKDAY_ABBREVIATIONS[self.day.weekday()]

    @property
    def label(self) -> str:
        """Header text, e.g. ``"OUT 19 SEG"``."""
        return f"{self.month_label} {self.day_label} {self.weekday_label}"


@dataclass(frozen=True, slots=True)
class DayGrid:
    """Ordered day columns spanning the visible window."""

    days: tuple[DayDescriptor, ...]

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[DayDescriptor]:
        return iter(self.days)

    def __getitem__(self, index: int) -> DayDescriptor:
        return self.days[index]

    @property
    def first_day(self) -> date:
        return self.days[0].day

    @property
    def last_day(self) -> date:
        return self.days[-1].day

    def column_of(self, day: date) -> int:
        """Column offset of a date from the first day; may fall outside the grid."""
        return days_between(self.first_day, day)

    def contains_column(self, column: int) -> bool:
        return 0 <= column < len(self.days)


def _start_candidates(project: Project) -> list[date | None]:
    return [
        project.created_day,
        project.deadline_day,
        project.maintenance_day,
        project.report_day,
    ]


def calculate_start_date(
    projects: Sequence[Project],
    categories: Sequence[Category],
    *,
    today: date,
    config: WindowConfig | None = None,
) -> date:
    """Compute the first day of the visible window.

    Takes the earliest creation/deadline/maintenance/report date among
    timeline-eligible projects, then clamps it to
    ``[today - lookback_days, today]``. With no dated projects the window
    starts today.

    Args:
        projects: All projects in the workspace
        categories: Category list, used to decide recurring eligibility
        today: The render pass's reference day
        config: Window settings (defaults if None)

    Returns:
        The window start date
    """
    config = config or WindowConfig()
    earliest_seen: date | None = None
    for project in projects:
        if is_timeline_eligible(project, categories):
            earliest_seen = earliest(earliest_seen, *_start_candidates(project))

    if earliest_seen is None:
        return today

    floor = add_days(today, -config.lookback_days)
    if earliest_seen < floor:
        if debug_enabled():
            get_logger().debug(f"Window start {earliest_seen} clamped to lookback floor {floor}")
        return floor
    if earliest_seen > today:
        return today
    return earliest_seen


def calculate_end_date(
    start_date: date,
    projects: Sequence[Project],
    *,
    config: WindowConfig | None = None,
) -> date:
    """Compute the last day of the visible window.

    The latest deadline, maintenance or report date across ``projects`` plus
    the trailing buffer; ``start_date + empty_span_days`` when none exist.
    """
    config = config or WindowConfig()

    latest_seen: date | None = None
    for project in projects:
        latest_seen = latest(
            latest_seen, project.deadline_day, project.maintenance_day, project.report_day
        )

    if latest_seen is None:
        return add_days(start_date, config.empty_span_days)
    return add_days(latest_seen, config.trailing_buffer_days)


def generate_day_grid(
    start_date: date,
    end_date: date,
    *,
    config: WindowConfig | None = None,
) -> DayGrid:
    """Expand ``[start_date, end_date]`` into day columns.

    The range is inclusive and always yields at least ``min_grid_days`` columns,
    even if ``end_date`` precedes ``start_date``.
    """
    config = config or WindowConfig()
    count = max(days_between(start_date, end_date) + 1, config.min_grid_days)
    return DayGrid(
        days=tuple(DayDescriptor(day=add_days(start_date, i), index=i) for i in range(count))
    )
