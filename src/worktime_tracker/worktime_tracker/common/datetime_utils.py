from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Protocol, Union

from ..core.exceptions import ValidationError

TimeOfDay = Union[str, time]

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid date: {value!r}") from e


def parse_time_of_day(value: TimeOfDay) -> time:
    """Parse an "HH:MM" (or "HH:MM:SS") string into a time.

    Seconds are accepted because MySQL TIME columns come back with them,
    but they are dropped.
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    m = _HHMM.match((value or "").strip()) if isinstance(value, str) else None
    if not m:
        raise ValidationError(f"Invalid time of day: {value!r}")

    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError(f"Invalid time of day: {value!r}")
    return time(hour=hours, minute=minutes)


def format_time_of_day(value: TimeOfDay) -> str:
    return parse_time_of_day(value).strftime("%H:%M")


def combine(work_date: date, value: TimeOfDay) -> datetime:
    return datetime.combine(work_date, parse_time_of_day(value))


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the following month."""
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month: {month!r}")
    start = date(int(year), int(month), 1)
    end = date(start.year + (start.month == 12), start.month % 12 + 1, 1)
    return start, end


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    def now(self) -> datetime:
        return now_local()


@dataclass
class FixedClock:
    """Clock pinned to a settable instant (tests, replays)."""

    current: datetime

    def now(self) -> datetime:
        return self.current
