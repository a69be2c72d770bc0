"""Attendance/schedule aggregation.

Everything here is a pure function over already-scoped record collections:
no repository access, no clock reads. ``now`` is always passed in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.model import TimeEntry
from ..core.exceptions import EntryOrderError, MalformedEntryError, ScheduleOutsideMonthError
from ..schedules.model import WorkSchedule
from .duration import hours_between_instants, rollover_checkout


@dataclass(frozen=True)
class CheckedInState:
    checked_in: bool
    open_entry: Optional[TimeEntry] = None
    # Open entries other than the authoritative last one.
    stale_open_entries: tuple[TimeEntry, ...] = ()

    @property
    def is_inconsistent(self) -> bool:
        return bool(self.stale_open_entries)


@dataclass(frozen=True)
class MonthlySummary:
    total_hours: float
    day_count: int
    avg_hours_per_day: float


def _require_check_in(entry: TimeEntry) -> datetime:
    if entry.check_in is None:
        raise MalformedEntryError(f"Time entry {entry.entry_id} has no check-in")
    return entry.check_in


def derive_checked_in_state(entries: Sequence[TimeEntry]) -> CheckedInState:
    """Checked-in state for one day's entries (ordered by check-in ascending).

    Only the last entry decides. Earlier open entries are reported, not
    repaired.
    """
    previous: Optional[datetime] = None
    for entry in entries:
        current = _require_check_in(entry)
        if previous is not None and current < previous:
            raise EntryOrderError("Entries must be ordered by check-in ascending")
        previous = current

    if not entries:
        return CheckedInState(checked_in=False)

    last = entries[-1]
    stale = tuple(e for e in entries[:-1] if e.is_open)
    if last.is_open:
        return CheckedInState(checked_in=True, open_entry=last, stale_open_entries=stale)
    return CheckedInState(checked_in=False, stale_open_entries=stale)


def compute_daily_total(entries: Sequence[TimeEntry], now: datetime) -> float:
    """Worked hours for the day, counting open sessions up to ``now``."""
    total = 0.0
    for entry in entries:
        check_in = _require_check_in(entry)
        if entry.working_hours is not None:
            total += float(entry.working_hours)
        elif entry.check_out is None:
            total += hours_between_instants(check_in, now)
    return total


def compute_monthly_planned_summary(
    schedules: Sequence[WorkSchedule],
    *,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> MonthlySummary:
    """Totals for one month of planned blocks.

    ``day_count`` counts distinct dates, not blocks. When ``year``/``month``
    are given every schedule must fall inside that month.
    """
    if year is not None and month is not None:
        for s in schedules:
            if (s.work_date.year, s.work_date.month) != (int(year), int(month)):
                raise ScheduleOutsideMonthError(
                    f"Schedule {s.schedule_id} on {s.work_date.isoformat()} is outside {int(year):04d}-{int(month):02d}"
                )

    total = math.fsum(float(s.planned_hours) for s in schedules)
    days: set[date] = {s.work_date for s in schedules}
    day_count = len(days)
    avg = total / day_count if day_count else 0.0
    return MonthlySummary(total_hours=total, day_count=day_count, avg_hours_per_day=avg)


def resolve_edited_entry(
    original: TimeEntry,
    new_check_in: datetime,
    new_check_out: Optional[datetime],
    *,
    work_date: Optional[date] = None,
) -> TimeEntry:
    """Apply an edit and recompute ``working_hours`` from the new pair.

    A checkout earlier than the check-in is moved to the next day before the
    difference is taken; the moved value is what gets stored.
    """
    if new_check_in is None:
        raise MalformedEntryError(f"Time entry {original.entry_id} has no check-in")

    check_out = None
    working_hours = None
    if new_check_out is not None:
        check_out = rollover_checkout(new_check_in, new_check_out)
        working_hours = hours_between_instants(new_check_in, check_out)

    return replace(
        original,
        work_date=work_date or original.work_date,
        check_in=new_check_in,
        check_out=check_out,
        working_hours=working_hours,
    )
