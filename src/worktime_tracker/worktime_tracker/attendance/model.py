from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one check-in/check-out pair."""

    entry_id: int
    user_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime] = None
    working_hours: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None
