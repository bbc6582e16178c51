"""Data models for prazo.

Projects, categories and stages are owned by the surrounding console and arrive
as full-list replacements; the engine only reads them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from .dates import parse_safe_date


class ProjectStatus(str, Enum):
    """Lifecycle status of a project (and of the stage it sits in)."""

    LEAD = "Lead"
    ACTIVE = "Active"
    REVIEW = "Review"
    COMPLETED = "Completed"
    FINISHED = "Finished"

    @property
    def is_closed(self) -> bool:
        """Completed and Finished projects no longer track a deadline."""
        return self in (ProjectStatus.COMPLETED, ProjectStatus.FINISHED)


def _default_list() -> list[str]:
    return []


@dataclass
class Project:
    """A client project as supplied by the persistence layer.

    Temporal fields keep whatever raw value the feed delivered (ISO string,
    native date, store timestamp, or None); the ``*_day`` properties expose the
    normalized calendar date.
    """

    id: str
    name: str
    status: ProjectStatus
    client: str = ""
    types: list[str] = field(default_factory=_default_list)
    type: str | None = None  # Legacy single category, used when types is empty
    stage_id: str | None = None
    progress: float = 0.0
    created_at: Any = None
    updated_at: Any = None
    deadline: Any = None
    maintenance_date: Any = None
    report_date: Any = None

    @property
    def categories(self) -> list[str]:
        """Category names, falling back to the legacy single type."""
        if self.types:
            return list(self.types)
        return [self.type] if self.type else []

    @property
    def primary_category(self) -> str | None:
        """The first category name, which drives filtering and color."""
        categories = self.categories
        return categories[0] if categories else None

    @property
    def created_day(self) -> date | None:
        return parse_safe_date(self.created_at)

    @property
    def deadline_day(self) -> date | None:
        return parse_safe_date(self.deadline)

    @property
    def maintenance_day(self) -> date | None:
        return parse_safe_date(self.maintenance_date)

    @property
    def report_day(self) -> date | None:
        return parse_safe_date(self.report_date)

    @property
    def has_checkpoint(self) -> bool:
        """Whether a maintenance or report date is present."""
        return self.maintenance_day is not None or self.report_day is not None


@dataclass(frozen=True)
class Category:
    """A service category; its position in the category list selects its color."""

    name: str
    is_recurring: bool = False
    id: str | None = None
    order: int | None = None


@dataclass(frozen=True)
class Stage:
    """A pipeline stage that projects move through."""

    id: str
    title: str
    status: ProjectStatus
    order: int = 0
    progress: float = 0.0


def has_recurring_category(project: Project, categories: Sequence[Category]) -> bool:
    """Whether any of the project's categories is flagged recurring."""
    recurring = {c.name for c in categories if c.is_recurring}
    return any(name in recurring for name in project.categories)
