from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}", code="invalid_date") from None


def parse_iso_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid datetime: {value!r}", code="invalid_datetime") from None


def parse_hhmm(value: Optional[str], field_name: str = "time") -> time:
    """Parse a strict ``HH:mm`` wall-clock string.

    Malformed input is rejected; there is no silent default.
    """
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required", code="missing_time")
    m = _HHMM.match(str(value).strip())
    if not m:
        raise ValidationError(f"{field_name} must be HH:mm, got {value!r}", code="invalid_time")
    return time(int(m.group(1)), int(m.group(2)))


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end`` (negative when end is earlier)."""
    return int((end - start).total_seconds() // 60)


def iter_dates(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
