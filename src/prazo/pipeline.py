"""Project selection and ordering for the timeline.

Selection runs in three steps: eligibility, category filter, sort. The sort is
stable, so projects with equal keys keep their feed order.
"""

from __future__ import annotations

import math
from collections.abc import Collection, Sequence
from datetime import date

from .dates import days_between
from .logger import get_logger, placement_enabled
from .models import Category, Project, has_recurring_category

# Sort key for projects with no date at all; always sorts last
UNDATED_SORT_KEY = math.inf


def has_active_deadline(project: Project) -> bool:
    """A deadline is tracked only while the project is still open."""
    return project.deadline_day is not None and not project.status.is_closed


def is_timeline_eligible(project: Project, categories: Sequence[Category]) -> bool:
    """Whether a project gets a row on the timeline.

    Eligible when it has an active deadline, or when it belongs to a recurring
    category and carries a maintenance or report date. The second rule keeps
    delivered recurring-service projects visible after completion.
    """
    if has_active_deadline(project):
        return True
    return has_recurring_category(project, categories) and project.has_checkpoint


def filter_by_category(
    projects: Sequence[Project], selected: Collection[str] | None
) -> list[Project]:
    """Keep projects whose primary category is selected.

    An empty or missing selection means no filter.
    """
    if not selected:
        return list(projects)
    return [p for p in projects if p.primary_category in selected]


def sort_key(project: Project, *, today: date) -> float:
    """Ordinal day used to order timeline rows.

    - The deadline, when present
    - Otherwise whichever of maintenance/report date is nearer to today
      (the earlier one on a tie)
    - Otherwise whichever of the two is present
    - Otherwise ``UNDATED_SORT_KEY``
    """
    deadline = project.deadline_day
    if deadline is not None:
        return float(deadline.toordinal())

    maintenance = project.maintenance_day
    report = project.report_day
    if maintenance is not None and report is not None:
        nearest = min(
            (maintenance, report),
            key=lambda d: (abs(days_between(today, d)), d),
        )
        return float(nearest.toordinal())
    if maintenance is not None:
        return float(maintenance.toordinal())
    if report is not None:
        return float(report.toordinal())
    return UNDATED_SORT_KEY


def sort_projects(projects: Sequence[Project], *, today: date) -> list[Project]:
    """Order projects by sort_key, preserving input order on ties."""
    return sorted(projects, key=lambda p: sort_key(p, today=today))


def eligible_projects(
    projects: Sequence[Project], categories: Sequence[Category]
) -> list[Project]:
    """All timeline-eligible projects, in feed order."""
    logger = get_logger()
    result: list[Project] = []
    for project in projects:
        if is_timeline_eligible(project, categories):
            result.append(project)
        elif placement_enabled():
            logger.placement(f"Skipping {project.id}: no active deadline or recurring checkpoint")
    return result


def select_projects(
    projects: Sequence[Project],
    categories: Sequence[Category],
    *,
    selected_categories: Collection[str] | None = None,
    today: date,
) -> list[Project]:
    """Run the full pipeline: eligibility, category filter, then sort."""
    eligible = eligible_projects(projects, categories)
    filtered = filter_by_category(eligible, selected_categories)
    return sort_projects(filtered, today=today)
