"""Timeline render pass: selection, window, and per-row layout.

``build_timeline`` is the pure entry point. ``TimelineEngine`` wraps it for
long-lived front ends that receive full-list replacements from a subscription
feed, recomputing the window and row selection only when their inputs change.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from .config import PrazoConfig
from .layout import (
    BarPlacement,
    MarkerPlacement,
    is_overdue,
    position_bar,
    position_markers,
    temporal_progress,
)
from .logger import get_logger
from .models import Category, Project, Stage
from .palette import (
    SWATCHES,
    ColorBucket,
    LegendChip,
    build_legend,
    color_for,
    contrast_text_color,
)
from .pipeline import eligible_projects, filter_by_category, sort_projects
from .stages import StageIndex
from .window import DayGrid, calculate_end_date, calculate_start_date, generate_day_grid

OVERDUE_LABEL = "Atrasado"
EMPTY_STATE_MESSAGE = "Nenhum projeto com prazo definido"


@dataclass(frozen=True, slots=True)
class TimelineRow:
    """Everything needed to draw one project row."""

    project: Project
    bar: BarPlacement
    progress: float  # Elapsed-time overlay, 0-100
    markers: tuple[MarkerPlacement, ...]
    color: ColorBucket
    stage_label: str
    is_overdue: bool

    @property
    def display_progress(self) -> int:
        """Percentage shown in the label: the overlay, or the stored value without a deadline."""
        if self.project.deadline_day is None:
            return round(self.project.progress)
        return round(self.progress)

    @property
    def label(self) -> str:
        if self.is_overdue:
            return OVERDUE_LABEL
        return f"{self.stage_label} ({self.display_progress}%)"


@dataclass(frozen=True)
class TimelineView:
    """Result of one render pass."""

    today: date
    grid: DayGrid
    rows: tuple[TimelineRow, ...]
    legend: tuple[LegendChip, ...]
    eligible_count: int

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def today_column(self) -> int | None:
        """Column of today, or None when today is outside the grid."""
        column = self.grid.column_of(self.today)
        return column if self.grid.contains_column(column) else None

    @property
    def summary(self) -> str:
        return f"Exibindo {len(self.rows)} de {self.eligible_count} projetos"

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-serializable representation."""
        return {
            "today": self.today.isoformat(),
            "today_column": self.today_column,
            "days": [
                {"index": d.index, "date": d.day.isoformat(), "label": d.label} for d in self.grid
            ],
            "rows": [_row_to_dict(row) for row in self.rows],
            "legend": [
                {"name": chip.name, "color": chip.bucket.value, "selected": chip.selected}
                for chip in self.legend
            ],
            "summary": self.summary,
            "empty": self.is_empty,
        }


def _row_to_dict(row: TimelineRow) -> dict[str, Any]:
    swatch = SWATCHES[row.color]
    return {
        "id": row.project.id,
        "name": row.project.name,
        "client": row.project.client,
        "category": row.project.primary_category,
        "color": row.color.value,
        "fill": swatch.fill,
        "badge_text_color": contrast_text_color(swatch.fill),
        "start_column": row.bar.start_column,
        "duration": row.bar.duration,
        "progress": round(row.progress, 2),
        "label": row.label,
        "overdue": row.is_overdue,
        "markers": [
            {
                "kind": m.kind.value,
                "date": m.day.isoformat(),
                "column": m.column,
                "offset_px": m.offset_px,
                "overdue": m.is_overdue,
            }
            for m in row.markers
        ],
    }


def _today_from(now: date | datetime | None) -> date:
    if now is None:
        return datetime.now().date()  # noqa: DTZ005 - the console renders in local time
    if isinstance(now, datetime):
        return now.date()
    return now


def build_window(
    eligible: Sequence[Project],
    categories: Sequence[Category],
    *,
    today: date,
    config: PrazoConfig | None = None,
) -> DayGrid:
    """Compute the day grid from the timeline-eligible projects."""
    config = config or PrazoConfig()
    start = calculate_start_date(eligible, categories, today=today, config=config.window)
    end = calculate_end_date(start, eligible, config=config.window)
    return generate_day_grid(start, end, config=config.window)


def layout_row(
    project: Project,
    grid: DayGrid,
    *,
    categories: Sequence[Category],
    stage_index: StageIndex,
    today: date,
    config: PrazoConfig | None = None,
) -> TimelineRow:
    """Lay out a single visible project."""
    config = config or PrazoConfig()
    return TimelineRow(
        project=project,
        bar=position_bar(project, grid, config=config.window),
        progress=temporal_progress(project, grid.first_day, today=today),
        markers=tuple(position_markers(project, grid, today=today, config=config.markers)),
        color=color_for(project.primary_category, categories),
        stage_label=stage_index.label_for(project),
        is_overdue=is_overdue(project, today=today),
    )


def build_timeline(  # noqa: PLR0913 - the render pass consumes every collaborator feed
    projects: Sequence[Project],
    categories: Sequence[Category],
    stages: Sequence[Stage] = (),
    *,
    selected_categories: Collection[str] | None = None,
    now: date | datetime | None = None,
    config: PrazoConfig | None = None,
) -> TimelineView:
    """Run a complete render pass.

    ``now`` is sampled once here (defaulting to the current local time) and
    the same day is used for the window, overlays and markers.

    Args:
        projects: Full project list for the workspace
        categories: Category list; order determines color
        stages: Stage list, used for row labels
        selected_categories: Active category filter; empty or None shows all
        now: Reference instant for this pass
        config: Layout settings (defaults if None)

    Returns:
        The laid-out timeline
    """
    config = config or PrazoConfig()
    today = _today_from(now)

    eligible = eligible_projects(projects, categories)
    visible = sort_projects(filter_by_category(eligible, selected_categories), today=today)
    grid = build_window(eligible, categories, today=today, config=config)
    stage_index = StageIndex(stages)

    rows = tuple(
        layout_row(
            project,
            grid,
            categories=categories,
            stage_index=stage_index,
            today=today,
            config=config,
        )
        for project in visible
    )

    get_logger().summary(
        f"Timeline {grid.first_day} to {grid.last_day}: "
        f"{len(rows)} of {len(eligible)} eligible projects shown"
    )

    return TimelineView(
        today=today,
        grid=grid,
        rows=rows,
        legend=tuple(build_legend(categories, selected_categories)),
        eligible_count=len(eligible),
    )


@dataclass
class TimelineEngine:
    """Stateful wrapper that caches the window and row order between renders.

    The window is recomputed when the project or category list is replaced or
    the day changes; the row order additionally when the filter changes. Row
    geometry is recomputed on every render.
    """

    config: PrazoConfig = field(default_factory=PrazoConfig)
    projects: list[Project] = field(default_factory=list[Project])
    categories: list[Category] = field(default_factory=list[Category])
    stages: list[Stage] = field(default_factory=list[Stage])
    selected_categories: frozenset[str] = frozenset()
    _eligible_cache: list[Project] | None = field(default=None, init=False, repr=False)
    _grid_cache: tuple[date, DayGrid] | None = field(default=None, init=False, repr=False)
    _order_cache: tuple[date, list[Project], int] | None = field(
        default=None, init=False, repr=False
    )

    def set_projects(self, projects: Sequence[Project]) -> None:
        """Replace the project list (the feed delivers full lists, no diffs)."""
        self.projects = list(projects)
        self._eligible_cache = None
        self._grid_cache = None
        self._order_cache = None

    def set_categories(self, categories: Sequence[Category]) -> None:
        self.categories = list(categories)
        self._eligible_cache = None
        self._grid_cache = None
        self._order_cache = None

    def set_stages(self, stages: Sequence[Stage]) -> None:
        self.stages = list(stages)

    def set_category_filter(self, selected: Collection[str] | None) -> None:
        self.selected_categories = frozenset(selected or ())
        self._order_cache = None

    def toggle_category(self, name: str) -> None:
        """Add or remove one category from the filter."""
        self.set_category_filter(self.selected_categories ^ {name})

    def _eligible(self) -> list[Project]:
        if self._eligible_cache is None:
            self._eligible_cache = eligible_projects(self.projects, self.categories)
        return self._eligible_cache

    def _grid(self, today: date) -> DayGrid:
        if self._grid_cache is None or self._grid_cache[0] != today:
            grid = build_window(self._eligible(), self.categories, today=today, config=self.config)
            self._grid_cache = (today, grid)
        return self._grid_cache[1]

    def _order(self, today: date) -> tuple[list[Project], int]:
        if self._order_cache is None or self._order_cache[0] != today:
            eligible = self._eligible()
            visible = sort_projects(
                filter_by_category(eligible, self.selected_categories), today=today
            )
            self._order_cache = (today, visible, len(eligible))
        return self._order_cache[1], self._order_cache[2]

    def render(self, now: date | datetime | None = None) -> TimelineView:
        """Lay out the current state against a single sampled ``now``."""
        today = _today_from(now)
        grid = self._grid(today)
        visible, eligible_count = self._order(today)
        stage_index = StageIndex(self.stages)
        rows = tuple(
            layout_row(
                project,
                grid,
                categories=self.categories,
                stage_index=stage_index,
                today=today,
                config=self.config,
            )
            for project in visible
        )
        return TimelineView(
            today=today,
            grid=grid,
            rows=rows,
            legend=tuple(build_legend(self.categories, self.selected_categories)),
            eligible_count=eligible_count,
        )
