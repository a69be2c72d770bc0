from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import WorkSchedule


class WorkScheduleRepository(Protocol):
    def list_by_month(self, *, user_id: int, year: int, month: int) -> Sequence[WorkSchedule]:
        """Ordered by date, then start time."""

        raise NotImplementedError

    def list_by_date(self, *, user_id: int, work_date: date) -> Sequence[WorkSchedule]:
        raise NotImplementedError

    def get_by_id(self, *, user_id: int, schedule_id: int) -> Optional[WorkSchedule]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        start_time: str,
        end_time: str,
        planned_hours: float,
        description: Optional[str] = None,
    ) -> WorkSchedule:
        raise NotImplementedError

    def update(self, *, schedule: WorkSchedule) -> Optional[WorkSchedule]:
        raise NotImplementedError

    def delete(self, *, user_id: int, schedule_id: int) -> bool:
        raise NotImplementedError
