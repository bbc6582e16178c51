"""Configuration loader for timeline layout and interaction settings.

All settings live in a single YAML file (prazo_config.yaml). Every section is
optional; the defaults reproduce the console's built-in behavior.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .models import ProjectStatus

CONFIG_FILENAME = "prazo_config.yaml"


def _default_estimated_weeks() -> dict[ProjectStatus, int]:
    return {ProjectStatus.ACTIVE: 4, ProjectStatus.COMPLETED: 2}


class WindowConfig(BaseModel):
    """Configuration for the visible calendar window and bar estimation."""

    lookback_days: int = Field(default=7, ge=0)  # Oldest allowed window start, relative to today
    trailing_buffer_days: int = Field(default=3, ge=0)  # Padding after the latest date
    empty_span_days: int = Field(default=7, ge=0)  # Window length when nothing has a date
    min_grid_days: int = Field(default=7, ge=1)  # Floor on the number of day columns
    estimated_weeks: dict[ProjectStatus, int] = Field(default_factory=_default_estimated_weeks)
    default_estimated_weeks: int = Field(default=3, ge=0)  # Statuses missing above

    def weeks_for(self, status: ProjectStatus) -> int:
        """Estimated bar length in weeks for a project with no deadline."""
        return self.estimated_weeks.get(status, self.default_estimated_weeks)


class MarkerConfig(BaseModel):
    """Configuration for maintenance/report marker glyphs."""

    collision_offset_px: int = Field(default=12, ge=0)


class PanConfig(BaseModel):
    """Configuration for drag-to-scroll behavior."""

    scroll_multiplier: float = Field(default=1.5, gt=0)
    drag_threshold_px: float = Field(default=5.0, ge=0)
    click_suppress_seconds: float = Field(default=0.1, ge=0)
    interactive_tags: list[str] = Field(
        default_factory=lambda: ["input", "select", "textarea", "a"]
    )  # Pointer-down on these never starts a drag

    @field_validator("interactive_tags", mode="before")
    @classmethod
    def lowercase_tags(cls, v: Any) -> list[str]:
        """Normalize tag names to lowercase."""
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [str(tag).lower() for tag in v]


class RenderConfig(BaseModel):
    """Configuration for the terminal renderer."""

    column_width: int = Field(default=3, ge=1)  # Characters per day column
    label_width: int = Field(default=24, ge=8)  # Characters for the project name column
    show_legend: bool = True


class PrazoConfig(BaseModel):
    """Top-level configuration."""

    window: WindowConfig = Field(default_factory=WindowConfig)
    markers: MarkerConfig = Field(default_factory=MarkerConfig)
    pan: PanConfig = Field(default_factory=PanConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)


def load_config(config_path: Path | str) -> PrazoConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to prazo_config.yaml

    Returns:
        The validated configuration

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open(encoding="utf-8") as f:
        data: Any = yaml.safe_load(f)

    if not data:
        raise ValueError("Empty configuration file")
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping at the top level")

    unknown = set(data) - set(PrazoConfig.model_fields)
    if unknown:
        raise ValueError(f"Unknown configuration section(s): {', '.join(sorted(unknown))}")

    # pydantic's ValidationError subclasses ValueError
    return PrazoConfig.model_validate(data)


def discover_config(
    workspace_path: Path | str | None = None,
    config_path: Path | str | None = None,
) -> PrazoConfig:
    """Find and load configuration, falling back to defaults.

    Search order:
    1. Explicit config_path argument (must exist)
    2. Workspace file directory / prazo_config.yaml
    3. Current directory / prazo_config.yaml
    """
    if config_path is not None:
        return load_config(config_path)

    if workspace_path is not None:
        dir_config = Path(workspace_path).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return PrazoConfig()
