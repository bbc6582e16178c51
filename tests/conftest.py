"""Pytest configuration and fixtures for prazo tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date, timedelta
from typing import Any

import pytest

from prazo.logger import reset_logger
from prazo.models import Category, Project, ProjectStatus

# A Monday; every date-dependent test is pinned to it
TODAY = date(2026, 10, 19)


def days(offset: int) -> date:
    """TODAY shifted by ``offset`` days."""
    return TODAY + timedelta(days=offset)


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Keep logger configuration from leaking between tests."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def categories() -> list[Category]:
    """Branding (amber), Web (blue), and a recurring service (indigo)."""
    return [
        Category(name="Branding"),
        Category(name="Web"),
        Category(name="Marketing Digital", is_recurring=True),
    ]


@pytest.fixture
def make_project() -> Callable[..., Project]:
    """Factory for projects with sequential ids; any field can be overridden."""
    counter = iter(range(1, 10_000))

    def _make(status: ProjectStatus = ProjectStatus.ACTIVE, **kwargs: Any) -> Project:
        number = next(counter)
        kwargs.setdefault("id", f"p{number}")
        kwargs.setdefault("name", f"Project {number}")
        kwargs.setdefault("types", ["Web"])
        return Project(status=status, **kwargs)

    return _make
