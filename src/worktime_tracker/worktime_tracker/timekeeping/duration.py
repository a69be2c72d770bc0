"""Duration calculator.

Pure conversions between instants / times of day and decimal hours. All
midnight rollover in the package goes through ``hours_between_times_of_day``
or ``rollover_checkout`` so there is exactly one rule: an end strictly
earlier than its start belongs to the next day.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import TimeOfDay, parse_time_of_day
from ..core.constants import (
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    NO_VALUE,
    PLANNED_HOURS_PRECISION,
    SECONDS_PER_HOUR,
)
from ..core.enums import DurationStyle


@dataclass(frozen=True)
class DurationParts:
    """Whole hours plus remainder minutes (0-59)."""

    hours: int
    minutes: int
    negative: bool = False


def hours_between_instants(start: datetime, end: datetime) -> float:
    """Elapsed hours between two absolute instants.

    No rounding and no rollover: ``end < start`` gives a negative value.
    """
    return (end - start) / timedelta(seconds=SECONDS_PER_HOUR)


def hours_between_times_of_day(start: TimeOfDay, end: TimeOfDay) -> float:
    """Planned hours between two "HH:MM" values, rounded to 2 decimals.

    ``22:00 -> 06:00`` is 8 hours. Equal values are 0 hours, not 24.
    """
    s = parse_time_of_day(start)
    e = parse_time_of_day(end)

    minutes = (e.hour * MINUTES_PER_HOUR + e.minute) - (s.hour * MINUTES_PER_HOUR + s.minute)
    if minutes < 0:
        minutes += MINUTES_PER_DAY
    return round(minutes / MINUTES_PER_HOUR, PLANNED_HOURS_PRECISION)


def rollover_checkout(check_in: datetime, check_out: datetime) -> datetime:
    """Move a checkout that lands before its check-in to the next day."""
    if check_out < check_in:
        return check_out + timedelta(days=1)
    return check_out


def duration_parts(hours: Optional[float]) -> Optional[DurationParts]:
    if hours is None or not math.isfinite(hours):
        return None

    negative = hours < 0
    value = abs(float(hours))
    whole = math.floor(value)
    minutes = round((value - whole) * MINUTES_PER_HOUR)
    if minutes == MINUTES_PER_HOUR:
        whole += 1
        minutes = 0
    return DurationParts(hours=int(whole), minutes=int(minutes), negative=negative and (whole > 0 or minutes > 0))


def format_duration(hours: Optional[float], compact: bool = False) -> str:
    """Render decimal hours for display.

    Full style: "7 hours 5 minutes". Compact style (calendar cells): "7.1h".
    ``None``, NaN and infinities render as ``NO_VALUE`` so a missing value
    never reads as zero.
    """
    parts = duration_parts(hours)
    if parts is None:
        return NO_VALUE

    sign = "-" if parts.negative else ""
    style = DurationStyle.COMPACT if compact else DurationStyle.FULL
    if style is DurationStyle.COMPACT:
        return f"{sign}{parts.hours + parts.minutes / MINUTES_PER_HOUR:.1f}h"

    hour_word = "hour" if parts.hours == 1 else "hours"
    minute_word = "minute" if parts.minutes == 1 else "minutes"
    return f"{sign}{parts.hours} {hour_word} {parts.minutes} {minute_word}"
