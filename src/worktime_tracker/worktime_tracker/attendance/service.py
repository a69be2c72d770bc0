from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, SystemClock, TimeOfDay, combine
from ..common.validators import require_positive_id
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..timekeeping.aggregator import (
    CheckedInState,
    compute_daily_total,
    derive_checked_in_state,
    resolve_edited_entry,
)
from ..timekeeping.duration import format_duration, hours_between_instants
from .model import TimeEntry
from .repository import TimeEntryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodayStatus:
    work_date: date
    entries: Sequence[TimeEntry]
    state: CheckedInState
    total_hours: float

    @property
    def total_display(self) -> str:
        return format_duration(self.total_hours)


class TimeEntryService:
    def __init__(self, entries: TimeEntryRepository, *, clock: Optional[Clock] = None):
        self._entries = entries
        self._clock = clock or SystemClock()

    def today(self, user_id: int) -> TodayStatus:
        """Entries, checked-in state and live total for the current day.

        Callers poll this on a timer; every call re-reads the clock.
        """
        return self._status(user_id, self._clock.now())

    def _status(self, user_id: int, now: datetime) -> TodayStatus:
        user_id = require_positive_id(user_id, "User")
        work_date = now.date()

        entries = list(self._entries.list_by_date(user_id=user_id, work_date=work_date))
        state = derive_checked_in_state(entries)
        if state.is_inconsistent:
            logger.warning(
                "User %s has %d stale open entries on %s: %s",
                user_id,
                len(state.stale_open_entries),
                work_date.isoformat(),
                [e.entry_id for e in state.stale_open_entries],
            )

        return TodayStatus(
            work_date=work_date,
            entries=entries,
            state=state,
            total_hours=compute_daily_total(entries, now),
        )

    def check_in(self, user_id: int) -> TimeEntry:
        now = self._clock.now()
        status = self._status(user_id, now)
        if status.state.checked_in:
            raise ValidationError("Already checked in")

        entry = self._entries.create_checkin(user_id=int(user_id), work_date=status.work_date, check_in=now)
        logger.info("User %s checked in (entry %s)", user_id, entry.entry_id)
        return entry

    def check_out(self, user_id: int) -> TimeEntry:
        now = self._clock.now()
        status = self._status(user_id, now)
        open_entry = status.state.open_entry
        if not status.state.checked_in or open_entry is None:
            raise ValidationError("Not checked in")

        updated = self._entries.update_checkout(
            user_id=int(user_id),
            entry_id=open_entry.entry_id,
            check_out=now,
            working_hours=hours_between_instants(open_entry.check_in, now),
        )
        if updated is None:
            raise NotFoundError("Time entry not found")

        logger.info("User %s checked out (entry %s, %.2f h)", user_id, updated.entry_id, updated.working_hours or 0.0)
        return updated

    def edit_entry(
        self,
        user_id: int,
        entry_id: int,
        *,
        work_date: date,
        check_in: TimeOfDay,
        check_out: Optional[TimeOfDay] = None,
    ) -> TimeEntry:
        """Manual "HH:MM" edit against a fixed work date.

        A checkout earlier than the check-in is treated as the next day.
        """
        user_id = require_positive_id(user_id, "User")
        original = self._get_owned(user_id, entry_id)

        new_check_in = combine(work_date, check_in)
        new_check_out = combine(work_date, check_out) if check_out else None
        resolved = resolve_edited_entry(original, new_check_in, new_check_out, work_date=work_date)

        updated = self._entries.update(entry=resolved)
        if updated is None:
            raise NotFoundError("Time entry not found")

        logger.info("User %s edited entry %s", user_id, updated.entry_id)
        return updated

    def delete_entry(self, user_id: int, entry_id: int) -> None:
        user_id = require_positive_id(user_id, "User")
        if not self._entries.delete(user_id=user_id, entry_id=require_positive_id(entry_id, "Entry")):
            raise NotFoundError("Time entry not found")
        logger.info("User %s deleted entry %s", user_id, entry_id)

    def history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[TimeEntry]:
        return self._entries.list_all(user_id=require_positive_id(user_id, "User"), limit=int(limit))

    def monthly_worked_hours(self, user_id: int, year: int, month: int) -> float:
        """Worked hours over a month; open sessions count up to now."""
        entries = self._entries.list_by_month(user_id=require_positive_id(user_id, "User"), year=year, month=month)
        return compute_daily_total(entries, self._clock.now())

    def _get_owned(self, user_id: int, entry_id: int) -> TimeEntry:
        entry = self._entries.get_by_id(user_id=user_id, entry_id=require_positive_id(entry_id, "Entry"))
        if entry is None:
            raise NotFoundError("Time entry not found")
        return entry
