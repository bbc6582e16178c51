"""Timeline output backends."""

from prazo.backends.base import TimelineBackend
from prazo.backends.json_export import JsonBackend
from prazo.backends.text import TextBackend

__all__ = [
    "JsonBackend",
    "TextBackend",
    "TimelineBackend",
]
