"""Workspace document loading."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .logger import get_logger
from .models import Category, Project, Stage
from .schemas import CategorySchema, ProjectSchema, StageSchema, WorkspaceSchema


@dataclass
class Workspace:
    """The three collaborator feeds for one workspace."""

    projects: list[Project] = field(default_factory=list[Project])
    categories: list[Category] = field(default_factory=list[Category])
    stages: list[Stage] = field(default_factory=list[Stage])


def _to_project(schema: ProjectSchema) -> Project:
    return Project(
        id=schema.id,
        name=schema.name,
        client=schema.client,
        status=schema.status,
        types=schema.types,
        type=schema.type,
        stage_id=schema.stage_id,
        progress=schema.progress,
        created_at=schema.created_at,
        updated_at=schema.updated_at,
        deadline=schema.deadline,
        maintenance_date=schema.maintenance_date,
        report_date=schema.report_date,
    )


def _to_category(schema: CategorySchema) -> Category:
    return Category(
        name=schema.name, is_recurring=schema.is_recurring, id=schema.id, order=schema.order
    )


def _to_stage(schema: StageSchema) -> Stage:
    return Stage(
        id=schema.id,
        title=schema.title,
        status=schema.status,
        order=schema.order,
        progress=schema.progress,
    )


def order_categories(categories: list[Category]) -> list[Category]:
    """Sort by explicit ``order``; unordered categories keep their place after ordered ones."""
    return sorted(categories, key=lambda c: math.inf if c.order is None else c.order)


def parse_workspace(data: dict[str, Any]) -> Workspace:
    """Validate raw workspace data and convert it to domain models."""
    try:
        schema = WorkspaceSchema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid workspace structure: {e}") from e

    return Workspace(
        projects=[_to_project(p) for p in schema.projects],
        categories=order_categories([_to_category(c) for c in schema.categories]),
        stages=[_to_stage(s) for s in schema.stages],
    )


def load_workspace(path: Path | str) -> Workspace:
    """Load a workspace document from a YAML or JSON file.

    Raises:
        ParseError: If the file is missing or not valid YAML/JSON
        ValidationError: If the document doesn't match the workspace schema
    """
    path = Path(path)
    if not path.exists():
        raise ParseError(f"File not found: {path}")

    data: Any
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f) if path.suffix.lower() == ".json" else yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ParseError(f"Failed to parse workspace file: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError("Workspace file must contain a mapping at the root level")

    workspace = parse_workspace(data)  # type: ignore[arg-type]
    get_logger().summary(
        f"Loaded {len(workspace.projects)} projects, {len(workspace.categories)} categories, "
        f"{len(workspace.stages)} stages from {path}"
    )
    return workspace
