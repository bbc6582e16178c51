"""Tests for bar placement, elapsed-time overlay and marker placement."""

from collections.abc import Callable
from datetime import date

import pytest
from conftest import days

from prazo.config import MarkerConfig, WindowConfig
from prazo.layout import (
    BarPlacement,
    MarkerKind,
    effective_end,
    effective_start,
    is_overdue,
    position_bar,
    position_markers,
    temporal_progress,
)
from prazo.logger import setup_logger
from prazo.models import Project, ProjectStatus
from prazo.window import DayGrid, generate_day_grid

MakeProject = Callable[..., Project]


@pytest.fixture
def grid(today: date) -> DayGrid:
    """Eight columns, today through today + 7."""
    return generate_day_grid(today, days(7))


class TestEffectiveDates:
    """Test effective start and end resolution."""

    def test_start_uses_creation_date_inside_grid(
        self, today: date, make_project: MakeProject
    ) -> None:
        assert effective_start(make_project(created_at=days(2)), today) == days(2)

    def test_start_clamps_to_grid_start(self, today: date, make_project: MakeProject) -> None:
        assert effective_start(make_project(created_at=days(-10)), today) == today
        assert effective_start(make_project(), today) == today
        assert effective_start(make_project(created_at="garbage"), today) == today

    def test_end_is_deadline(self, today: date, make_project: MakeProject) -> None:
        assert effective_end(make_project(deadline=days(5)), today) == days(5)

    @pytest.mark.parametrize(
        ("status", "weeks"),
        [
            (ProjectStatus.ACTIVE, 4),
            (ProjectStatus.COMPLETED, 2),
            (ProjectStatus.LEAD, 3),
            (ProjectStatus.REVIEW, 3),
            (ProjectStatus.FINISHED, 3),
        ],
    )
    def test_end_estimate_by_status(
        self, status: ProjectStatus, weeks: int, today: date, make_project: MakeProject
    ) -> None:
        project = make_project(status=status)
        assert effective_end(project, today) == days(weeks * 7)

    def test_end_estimate_is_configurable(self, today: date, make_project: MakeProject) -> None:
        config = WindowConfig(estimated_weeks={ProjectStatus.ACTIVE: 1})
        assert effective_end(make_project(), today, config=config) == days(7)


class TestPositionBar:
    """Test mapping projects onto grid columns."""

    def test_old_project_is_clamped_to_first_column(
        self, grid: DayGrid, make_project: MakeProject
    ) -> None:
        project = make_project(created_at=days(-10), deadline=days(2))
        assert position_bar(project, grid) == BarPlacement(start_column=0, duration=3)

    def test_start_inside_window_is_left_filled(
        self, grid: DayGrid, make_project: MakeProject
    ) -> None:
        project = make_project(created_at=days(2), deadline=days(5))
        assert position_bar(project, grid) == BarPlacement(start_column=0, duration=6)

    def test_left_fill_is_logged_at_placement_level(
        self, grid: DayGrid, make_project: MakeProject, capsys: pytest.CaptureFixture[str]
    ) -> None:
        setup_logger(2)
        project = make_project(id="late-start", created_at=days(2), deadline=days(5))
        position_bar(project, grid)
        assert "Left-filling late-start" in capsys.readouterr().err

    def test_estimate_is_clipped_to_grid(self, grid: DayGrid, make_project: MakeProject) -> None:
        project = make_project(created_at=days(0))
        assert position_bar(project, grid) == BarPlacement(start_column=0, duration=8)

    def test_deadline_before_grid_gets_one_column(
        self, grid: DayGrid, make_project: MakeProject
    ) -> None:
        project = make_project(deadline=days(-5))
        assert position_bar(project, grid) == BarPlacement(start_column=0, duration=1)

    def test_deadline_before_creation(self, grid: DayGrid, make_project: MakeProject) -> None:
        project = make_project(created_at=days(3), deadline=days(1))
        bar = position_bar(project, grid)
        assert bar.start_column == 0
        assert bar.duration >= 1

    def test_creation_after_grid_end(self, grid: DayGrid, make_project: MakeProject) -> None:
        project = make_project(created_at=days(20), deadline=days(25))
        assert position_bar(project, grid) == BarPlacement(start_column=0, duration=8)

    def test_end_column(self) -> None:
        assert BarPlacement(start_column=0, duration=3).end_column == 2

    @pytest.mark.parametrize("created", [None, -30, -3, 0, 3, 7, 12])
    @pytest.mark.parametrize("deadline", [None, -9, -1, 0, 4, 7, 40])
    @pytest.mark.parametrize("status", [ProjectStatus.ACTIVE, ProjectStatus.LEAD])
    def test_bar_always_fits_the_grid(
        self,
        created: int | None,
        deadline: int | None,
        status: ProjectStatus,
        grid: DayGrid,
        make_project: MakeProject,
    ) -> None:
        project = make_project(
            status=status,
            created_at=None if created is None else days(created),
            deadline=None if deadline is None else days(deadline),
        )
        bar = position_bar(project, grid)
        assert 0 <= bar.start_column < len(grid)
        assert bar.duration >= 1
        assert bar.start_column + bar.duration <= len(grid)


class TestTemporalProgress:
    """Test the elapsed-time overlay."""

    def test_no_deadline_is_zero(self, today: date, make_project: MakeProject) -> None:
        project = make_project(created_at=days(-3), progress=80)
        assert temporal_progress(project, today, today=today) == 0.0

    def test_malformed_deadline_is_zero(self, today: date, make_project: MakeProject) -> None:
        project = make_project(deadline="31/12/2026")
        assert temporal_progress(project, today, today=today) == 0.0

    @pytest.mark.parametrize("status", [ProjectStatus.COMPLETED, ProjectStatus.FINISHED])
    def test_closed_projects_are_full(
        self, status: ProjectStatus, today: date, make_project: MakeProject
    ) -> None:
        project = make_project(status=status, created_at=today, deadline=days(10))
        assert temporal_progress(project, today, today=today) == 100.0

    def test_overdue_is_full(self, today: date, make_project: MakeProject) -> None:
        project = make_project(deadline=days(-5))
        assert temporal_progress(project, days(-7), today=today) == 100.0

    def test_deadline_before_start_is_full(self, today: date, make_project: MakeProject) -> None:
        project = make_project(created_at=days(5), deadline=days(3))
        assert temporal_progress(project, today, today=today) == 100.0

    def test_same_day_span_before_deadline(self, today: date, make_project: MakeProject) -> None:
        project = make_project(created_at=days(3), deadline=days(3))
        assert temporal_progress(project, today, today=today) == 0.0

    def test_same_day_span_on_deadline(self, today: date, make_project: MakeProject) -> None:
        project = make_project(created_at=today, deadline=today)
        assert temporal_progress(project, today, today=today) == 100.0

    def test_partial_progress(self, today: date, make_project: MakeProject) -> None:
        project = make_project(created_at=days(-4), deadline=days(6))
        assert temporal_progress(project, days(-7), today=today) == pytest.approx(40.0)

    def test_first_day_already_shows_progress(
        self, today: date, make_project: MakeProject
    ) -> None:
        project = make_project(created_at=today, deadline=days(4))
        assert temporal_progress(project, today, today=today) == pytest.approx(25.0)

    def test_missing_creation_counts_from_grid_start(
        self, today: date, make_project: MakeProject
    ) -> None:
        project = make_project(deadline=days(2))
        assert temporal_progress(project, days(-2), today=today) == pytest.approx(50.0)

    @pytest.mark.parametrize("created", [None, -20, -5, 0, 2, 9])
    @pytest.mark.parametrize("deadline", [None, -3, 0, 1, 5, 30])
    def test_progress_is_bounded(
        self, created: int | None, deadline: int | None, today: date, make_project: MakeProject
    ) -> None:
        project = make_project(
            created_at=None if created is None else days(created),
            deadline=None if deadline is None else days(deadline),
        )
        assert 0.0 <= temporal_progress(project, days(-7), today=today) <= 100.0


class TestIsOverdue:
    """Test overdue detection."""

    def test_past_deadline(self, today: date, make_project: MakeProject) -> None:
        assert is_overdue(make_project(deadline=days(-5)), today=today)

    def test_deadline_today_is_not_overdue(self, today: date, make_project: MakeProject) -> None:
        assert not is_overdue(make_project(deadline=today), today=today)

    def test_closed_project_is_not_overdue(self, today: date, make_project: MakeProject) -> None:
        project = make_project(status=ProjectStatus.COMPLETED, deadline=days(-5))
        assert not is_overdue(project, today=today)

    def test_no_deadline_is_not_overdue(self, today: date, make_project: MakeProject) -> None:
        assert not is_overdue(make_project(), today=today)


class TestPositionMarkers:
    """Test maintenance and report marker placement."""

    def test_single_marker(self, today: date, grid: DayGrid, make_project: MakeProject) -> None:
        project = make_project(maintenance_date=days(3))
        (marker,) = position_markers(project, grid, today=today)
        assert marker.kind is MarkerKind.MAINTENANCE
        assert marker.column == 3
        assert marker.day == days(3)
        assert marker.offset_px == 0
        assert not marker.is_overdue

    def test_no_checkpoints(self, today: date, grid: DayGrid, make_project: MakeProject) -> None:
        assert position_markers(make_project(deadline=days(3)), grid, today=today) == []

    def test_colliding_markers_are_nudged_apart(
        self, today: date, grid: DayGrid, make_project: MakeProject
    ) -> None:
        project = make_project(maintenance_date=days(2), report_date=days(2))
        markers = position_markers(project, grid, today=today)
        offsets = {m.kind: m.offset_px for m in markers}
        assert offsets == {MarkerKind.MAINTENANCE: -12, MarkerKind.REPORT: 12}
        assert {m.column for m in markers} == {2}

    def test_distinct_columns_are_not_nudged(
        self, today: date, grid: DayGrid, make_project: MakeProject
    ) -> None:
        project = make_project(maintenance_date=days(2), report_date=days(4))
        markers = position_markers(project, grid, today=today)
        assert [(m.kind, m.column, m.offset_px) for m in markers] == [
            (MarkerKind.MAINTENANCE, 2, 0),
            (MarkerKind.REPORT, 4, 0),
        ]

    def test_off_grid_markers_are_omitted(
        self, today: date, grid: DayGrid, make_project: MakeProject
    ) -> None:
        project = make_project(maintenance_date=days(20), report_date=days(-1))
        assert position_markers(project, grid, today=today) == []

    def test_off_grid_partner_does_not_cause_offset(
        self, today: date, grid: DayGrid, make_project: MakeProject
    ) -> None:
        project = make_project(maintenance_date=days(2), report_date=days(30))
        (marker,) = position_markers(project, grid, today=today)
        assert marker.offset_px == 0

    def test_past_markers_are_overdue(self, today: date, make_project: MakeProject) -> None:
        grid = generate_day_grid(days(-5), days(5))
        project = make_project(maintenance_date=days(-2), report_date=today)
        maintenance, report = position_markers(project, grid, today=today)
        assert maintenance.column == 3
        assert maintenance.is_overdue
        assert not report.is_overdue

    def test_collision_offset_is_configurable(
        self, today: date, grid: DayGrid, make_project: MakeProject
    ) -> None:
        project = make_project(maintenance_date=days(1), report_date=days(1))
        markers = position_markers(
            project, grid, today=today, config=MarkerConfig(collision_offset_px=8)
        )
        assert sorted(m.offset_px for m in markers) == [-8, 8]
