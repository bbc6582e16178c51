"""JSON backend for handing a laid-out timeline to other front ends."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prazo.timeline import TimelineView


class JsonBackend:
    """Serialize a ``TimelineView`` as JSON."""

    def __init__(self, *, indent: int | None = 2) -> None:
        self.indent = indent

    def render(self, view: TimelineView) -> str:
        return json.dumps(view.to_dict(), ensure_ascii=False, indent=self.indent)
