"""Drag-to-scroll controller for the timeline grid.

A two-state machine (Idle/Dragging) that turns pointer drags into horizontal
scrolling and remembers, briefly, that a drag happened so the click that ends
the gesture does not open a project.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar

from .config import PanConfig
from .logger import get_logger

T = TypeVar("T")


class PanState(str, Enum):
    """Gesture state."""

    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """A pointer event in container coordinates."""

    x: float
    y: float
    target_tag: str = "div"  # Element the pointer is over, e.g. "div", "input", "a"


class ScrollContainer(Protocol):
    """Anything with a horizontal scroll offset."""

    scroll_left: float


@dataclass
class _Gesture:
    origin_x: float
    origin_y: float
    origin_scroll: float


class PanController:
    """Translate pointer gestures into horizontal scroll of a container.

    ``clock`` returns seconds and defaults to ``time.monotonic``; the
    click-suppression window is measured against it, so no timer thread is
    needed.
    """

    def __init__(
        self,
        container: ScrollContainer,
        *,
        config: PanConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.container = container
        self.config = config or PanConfig()
        self._clock = clock
        self._state = PanState.IDLE
        self._gesture: _Gesture | None = None
        self._moved = False
        self._suppress_until: float | None = None

    @property
    def state(self) -> PanState:
        return self._state

    @property
    def drag_occurred(self) -> bool:
        """True during a drag past the threshold and for a short time after it."""
        if self._state is PanState.DRAGGING:
            return self._moved
        return self._suppress_until is not None and self._clock() < self._suppress_until

    def is_interactive(self, target_tag: str) -> bool:
        """Whether a pointer-down on this element belongs to the element itself."""
        return target_tag.lower() in self.config.interactive_tags

    def pointer_down(self, event: PointerEvent) -> bool:
        """Start a drag unless one is active or the target is interactive.

        Returns:
            True if a drag gesture started
        """
        if self._state is PanState.DRAGGING:
            return False
        if self.is_interactive(event.target_tag):
            return False

        self._state = PanState.DRAGGING
        self._gesture = _Gesture(event.x, event.y, self.container.scroll_left)
        self._moved = False
        self._suppress_until = None
        return True

    def pointer_move(self, event: PointerEvent) -> None:
        """Scroll proportionally to the horizontal distance dragged."""
        if self._state is not PanState.DRAGGING or self._gesture is None:
            return

        dx = event.x - self._gesture.origin_x
        dy = event.y - self._gesture.origin_y
        threshold = self.config.drag_threshold_px
        if not self._moved and (abs(dx) > threshold or abs(dy) > threshold):
            self._moved = True
            get_logger().debug(f"Drag detected after moving ({dx:.0f}, {dy:.0f})")

        scroll = self._gesture.origin_scroll - dx * self.config.scroll_multiplier
        self.container.scroll_left = max(0.0, scroll)

    def pointer_up(self, event: PointerEvent | None = None) -> None:
        """End the gesture; a real drag keeps suppressing clicks for a moment."""
        if self._state is not PanState.DRAGGING:
            return
        self._state = PanState.IDLE
        self._gesture = None
        if self._moved:
            self._suppress_until = self._clock() + self.config.click_suppress_seconds
        self._moved = False

    pointer_leave = pointer_up

    def click(self, item: T, on_open: Callable[[T], object]) -> bool:
        """Forward a click to ``on_open`` unless it ends a drag.

        Returns:
            True if ``on_open`` was called
        """
        if self.drag_occurred:
            get_logger().debug("Click suppressed after drag")
            return False
        on_open(item)
        return True
