"""Fixed-width terminal rendering of a timeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prazo.config import RenderConfig
from prazo.layout import MarkerKind
from prazo.timeline import EMPTY_STATE_MESSAGE

if TYPE_CHECKING:
    from prazo.layout import MarkerPlacement
    from prazo.timeline import TimelineRow, TimelineView

ELAPSED_CHAR = "█"
REMAINING_CHAR = "░"
TODAY_CHAR = "|"
BLANK_CHAR = " "
HEADER_TITLE = "Projetos / Clientes"
MARKER_GLYPHS = {MarkerKind.MAINTENANCE: "M", MarkerKind.REPORT: "R"}


class TextBackend:
    """Render a ``TimelineView`` as a text grid.

    Each day is ``column_width`` characters wide. Bars show the elapsed overlay
    as solid blocks and the remainder as light shade; markers are ``M``/``R``
    (lowercase when overdue) and today's column carries a ``|``.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def render(self, view: TimelineView) -> str:
        if view.is_empty:
            return "\n".join([HEADER_TITLE, "", EMPTY_STATE_MESSAGE, ""])

        lines = self._header(view)
        lines.extend(self._row(view, row) for row in view.rows)
        lines.append("")
        if self.config.show_legend and view.legend:
            lines.append(self._legend(view))
        lines.append(view.summary)
        lines.append("")
        return "\n".join(lines)

    def _pad_label(self, text: str) -> str:
        width = self.config.label_width
        if len(text) >= width:
            text = text[: width - 2] + "…"
        return text.ljust(width)

    def _header(self, view: TimelineView) -> list[str]:
        width = self.config.column_width
        months = "".join(d.month_label[:width].center(width) for d in view.grid)
        days = "".join(d.day_label[:width].center(width) for d in view.grid)
        weekdays = "".join(d.weekday_label[:width].center(width) for d in view.grid)
        return [
            self._pad_label(HEADER_TITLE) + months,
            self._pad_label("") + days,
            self._pad_label("") + weekdays,
        ]

    def _row(self, view: TimelineView, row: TimelineRow) -> str:
        width = self.config.column_width
        cells = [[BLANK_CHAR] * width for _ in range(len(view.grid))]

        bar = row.bar
        elapsed = round(bar.duration * row.progress / 100)
        for offset, column in enumerate(range(bar.start_column, bar.start_column + bar.duration)):
            char = ELAPSED_CHAR if offset < elapsed else REMAINING_CHAR
            cells[column] = [char] * width

        # Today line sits on top of the bar, markers on top of both
        today_column = view.today_column
        if today_column is not None:
            cells[today_column][width // 2] = TODAY_CHAR

        for marker in row.markers:
            cells[marker.column][self._marker_slot(marker)] = self._marker_glyph(marker)

        grid_text = "".join("".join(cell) for cell in cells)
        return f"{self._pad_label(row.project.name)}{grid_text}  {row.label}"

    def _marker_slot(self, marker: MarkerPlacement) -> int:
        """Character inside the cell: left/right when nudged apart, else centered."""
        if marker.offset_px < 0:
            return 0
        if marker.offset_px > 0:
            return self.config.column_width - 1
        return self.config.column_width // 2

    def _marker_glyph(self, marker: MarkerPlacement) -> str:
        glyph = MARKER_GLYPHS[marker.kind]
        return glyph.lower() if marker.is_overdue else glyph

    def _legend(self, view: TimelineView) -> str:
        chips = [
            f"[{'x' if chip.selected else ' '}] {chip.name} ({chip.bucket.value})"
            for chip in view.legend
        ]
        return "Legenda: " + "  ".join(chips)
