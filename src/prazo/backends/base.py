"""Base abstractions for timeline output backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from prazo.timeline import TimelineView


class TimelineBackend(Protocol):
    """Protocol for timeline renderers.

    A backend turns a laid-out ``TimelineView`` into one output format. It
    must not recompute geometry; every column, overlay and marker position
    comes from the view.
    """

    def render(self, view: TimelineView) -> str:
        """Render the view to a string."""
        ...
