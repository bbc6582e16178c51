"""Category color mapping shared by legend chips, bar fills and badges.

A category's color is a function of its position in the category list only:
bucket = index mod 6. Emerald is the last bucket so a category rarely shares
the color used elsewhere for "completed".
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from enum import Enum

from .models import Category

# Constants for color calculations
HEX_COLOR_FULL_LENGTH = 6
WCAG_LUMINANCE_THRESHOLD = 0.03928
WCAG_CONTRAST_MIDPOINT = 0.5


class ColorBucket(str, Enum):
    """The six category color buckets, in assignment order."""

    AMBER = "amber"
    BLUE = "blue"
    INDIGO = "indigo"
    PURPLE = "purple"
    ROSE = "rose"
    EMERALD = "emerald"


BUCKET_ORDER: tuple[ColorBucket, ...] = tuple(ColorBucket)
DEFAULT_BUCKET = ColorBucket.BLUE


@dataclass(frozen=True, slots=True)
class Swatch:
    """Concrete colors for one bucket: bar fill, light background, text."""

    fill: str
    light: str
    text: str


SWATCHES: dict[ColorBucket, Swatch] = {
    ColorBucket.AMBER: Swatch(fill="#f59e0b", light="#fffbeb", text="#b45309"),
    ColorBucket.BLUE: Swatch(fill="#3b82f6", light="#eff6ff", text="#1d4ed8"),
    ColorBucket.INDIGO: Swatch(fill="#6366f1", light="#eef2ff", text="#4338ca"),
    ColorBucket.PURPLE: Swatch(fill="#a855f7", light="#faf5ff", text="#7e22ce"),
    ColorBucket.ROSE: Swatch(fill="#f43f5e", light="#fff1f2", text="#be123c"),
    ColorBucket.EMERALD: Swatch(fill="#10b981", light="#ecfdf5", text="#047857"),
}


def bucket_for_index(index: int) -> ColorBucket:
    """Color bucket for a category list position."""
    return BUCKET_ORDER[index % len(BUCKET_ORDER)]


def color_for(category_name: str | None, categories: Sequence[Category]) -> ColorBucket:
    """Color bucket for a category name; blue when the name is unknown."""
    for index, category in enumerate(categories):
        if category.name == category_name:
            return bucket_for_index(index)
    return DEFAULT_BUCKET


@dataclass(frozen=True, slots=True)
class LegendChip:
    """A legend entry for one category."""

    name: str
    bucket: ColorBucket
    selected: bool

    @property
    def dimmed(self) -> bool:
        return not self.selected


def build_legend(
    categories: Sequence[Category], selected: Collection[str] | None = None
) -> list[LegendChip]:
    """One chip per category; with no selection every chip counts as selected."""
    return [
        LegendChip(
            name=category.name,
            bucket=bucket_for_index(index),
            selected=not selected or category.name in selected,
        )
        for index, category in enumerate(categories)
    ]


def contrast_text_color(bg_color: str) -> str:
    """Readable text color (black or white) for a hex background.

    Args:
        bg_color: Background color as ``#rrggbb``

    Returns:
        ``'#000000'`` or ``'#ffffff'``; black for anything unparseable
    """
    hex_color = bg_color.lstrip("#")
    if not bg_color.startswith("#") or len(hex_color) != HEX_COLOR_FULL_LENGTH:
        return "#000000"

    try:
        channels = [int(hex_color[i : i + 2], 16) / 255 for i in (0, 2, 4)]
    except ValueError:
        return "#000000"

    def linearize(c: float) -> float:
        return c / 12.92 if c <= WCAG_LUMINANCE_THRESHOLD else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (linearize(c) for c in channels)
    luminance = 0.2126 * r + 0.7152 * g + 0.0722 * b
    return "#000000" if luminance > WCAG_CONTRAST_MIDPOINT else "#ffffff"
