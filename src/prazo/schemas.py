"""Pydantic schemas for workspace documents.

Workspace exports come from the console's document store, so field names are
accepted both in the store's camelCase and in snake_case.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import ProjectStatus


class _FeedRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("id", mode="before", check_fields=False)
    @classmethod
    def coerce_id_to_string(cls, v: Any) -> str:
        """Store ids may be numeric in hand-written files."""
        return str(v)


class ProjectSchema(_FeedRecord):
    """Schema for a project record."""

    id: str
    name: str
    client: str = ""
    status: ProjectStatus
    types: list[str] = Field(default_factory=list)
    type: str | None = None
    stage_id: str | None = Field(default=None, alias="stageId")
    progress: float = Field(default=0.0, ge=0, le=100)
    created_at: Any = Field(default=None, alias="createdAt")
    updated_at: Any = Field(default=None, alias="updatedAt")
    deadline: Any = None
    maintenance_date: Any = Field(default=None, alias="maintenanceDate")
    report_date: Any = Field(default=None, alias="reportDate")

    @field_validator("types", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Accept a single category name where a list is expected."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]


class CategorySchema(_FeedRecord):
    """Schema for a category record."""

    id: str | None = None
    name: str
    is_recurring: bool = Field(default=False, alias="isRecurring")
    order: int | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id_to_string(cls, v: Any) -> str | None:
        return None if v is None else str(v)


class StageSchema(_FeedRecord):
    """Schema for a stage record."""

    id: str
    title: str
    status: ProjectStatus
    order: int = 0
    progress: float = 0.0


class WorkspaceSchema(BaseModel):
    """Schema for an entire workspace document."""

    projects: list[ProjectSchema] = Field(default_factory=list)
    categories: list[CategorySchema] = Field(default_factory=list)
    stages: list[StageSchema] = Field(default_factory=list)

    @field_validator("projects", "categories", "stages", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        """An empty YAML section loads as None."""
        return [] if v is None else v
