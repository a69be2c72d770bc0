from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import TimeEntry


class TimeEntryRepository(Protocol):
    """Owner-scoped storage for time entries.

    ``list_by_date`` must return entries ordered by check-in ascending.
    """

    def list_by_date(self, *, user_id: int, work_date: date) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def list_by_month(self, *, user_id: int, year: int, month: int) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def list_all(self, *, user_id: int, limit: int) -> Sequence[TimeEntry]:
        """Newest work date first (dashboard history)."""

        raise NotImplementedError

    def get_by_id(self, *, user_id: int, entry_id: int) -> Optional[TimeEntry]:
        raise NotImplementedError

    def create_checkin(self, *, user_id: int, work_date: date, check_in: datetime) -> TimeEntry:
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        user_id: int,
        entry_id: int,
        check_out: datetime,
        working_hours: float,
    ) -> Optional[TimeEntry]:
        raise NotImplementedError

    def update(self, *, entry: TimeEntry) -> Optional[TimeEntry]:
        """Persist every mutable field of ``entry`` (manual edit)."""

        raise NotImplementedError

    def delete(self, *, user_id: int, entry_id: int) -> bool:
        raise NotImplementedError
