"""Safe date parsing and calendar-day arithmetic.

Every temporal field on a project is optional and may arrive as an ISO string,
a native ``date``/``datetime``, or a document-store timestamp. Everything is
normalized to a plain ``date`` here; anything unreadable becomes ``None`` and is
treated downstream as "field absent".
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any

# Leading calendar date of an ISO string; any time/offset suffix is ignored
_ISO_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:$|[T ])")

# Accessors exposed by document-store timestamp types, tried in order
_TIMESTAMP_CONVERTERS = ("to_datetime", "to_date", "toDate")


def parse_safe_date(value: Any) -> date | None:
    """Normalize a heterogeneous date value to a calendar date.

    Accepts:
    - ``date`` / ``datetime`` (time-of-day is dropped)
    - ``"YYYY-MM-DD"`` optionally followed by ``T...`` or a space and a time
    - timestamp-like objects with ``to_datetime()``, ``to_date()`` or ``toDate()``
    - mappings or objects carrying ``seconds`` (and optionally ``nanoseconds``)

    Args:
        value: The raw field value

    Returns:
        The calendar date, or None if the value is missing or unreadable
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        return _parse_iso_string(value)

    for converter_name in _TIMESTAMP_CONVERTERS:
        converter = getattr(value, converter_name, None)
        if callable(converter):
            try:
                converted = converter()
            except (TypeError, ValueError, OverflowError):
                return None
            # Only accept native results, so a converter cannot loop back here
            if isinstance(converted, (date, datetime)):
                return parse_safe_date(converted)
            return None

    seconds = _extract_seconds(value)
    if seconds is not None:
        try:
            return datetime.fromtimestamp(seconds).date()  # noqa: DTZ006 - local calendar day
        except (OverflowError, OSError, ValueError):
            return None

    return None


def _parse_iso_string(text: str) -> date | None:
    """Parse the calendar-date prefix of an ISO-8601 string."""
    match = _ISO_DATE_PREFIX.match(text.strip())
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _extract_seconds(value: Any) -> float | None:
    """Pull epoch seconds out of a serialized timestamp, if it looks like one."""
    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0))
    else:
        seconds = getattr(value, "seconds", None)
        nanos = getattr(value, "nanoseconds", 0)

    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return None
    if isinstance(nanos, bool) or not isinstance(nanos, (int, float)):
        nanos = 0
    return seconds + nanos / 1_000_000_000


def days_between(start: date, end: date) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier)."""
    return (end - start).days


def add_days(day: date, count: int) -> date:
    """Shift a date by ``count`` calendar days."""
    return day + timedelta(days=count)


def earliest(*candidates: date | None) -> date | None:
    """Earliest non-None date, or None."""
    present = [c for c in candidates if c is not None]
    return min(present) if present else None


def latest(*candidates: date | None) -> date | None:
    """Latest non-None date, or None."""
    present = [c for c in candidates if c is not None]
    return max(present) if present else None
