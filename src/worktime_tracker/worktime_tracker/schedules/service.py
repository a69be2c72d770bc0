from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import TimeOfDay, format_time_of_day
from ..common.validators import optional_text, require_positive_id
from ..core.exceptions import NotFoundError
from ..timekeeping.aggregator import MonthlySummary, compute_monthly_planned_summary
from ..timekeeping.duration import hours_between_times_of_day
from .model import WorkSchedule
from .repository import WorkScheduleRepository

logger = logging.getLogger(__name__)

# Marks an omitted field in partial updates.
KEEP = object()


@dataclass(frozen=True)
class MonthlySchedules:
    year: int
    month: int
    schedules: Sequence[WorkSchedule]
    summary: MonthlySummary


class ScheduleService:
    def __init__(self, schedules: WorkScheduleRepository):
        self._schedules = schedules

    def create(
        self,
        user_id: int,
        *,
        work_date: date,
        start_time: TimeOfDay,
        end_time: TimeOfDay,
        description: Optional[str] = None,
    ) -> WorkSchedule:
        user_id = require_positive_id(user_id, "User")
        start, end = format_time_of_day(start_time), format_time_of_day(end_time)

        created = self._schedules.create(
            user_id=user_id,
            work_date=work_date,
            start_time=start,
            end_time=end,
            planned_hours=hours_between_times_of_day(start, end),
            description=optional_text(description, "Description"),
        )
        logger.info("User %s planned %s %s-%s (%.2f h)", user_id, work_date.isoformat(), start, end, created.planned_hours)
        return created

    def update(
        self,
        user_id: int,
        schedule_id: int,
        *,
        start_time: TimeOfDay,
        end_time: TimeOfDay,
        description: object = KEEP,
        work_date: Optional[date] = None,
    ) -> WorkSchedule:
        """Replace a block's times; ``planned_hours`` is always recomputed.

        ``description`` left as ``KEEP`` preserves the stored text; ``None``
        clears it.
        """
        user_id = require_positive_id(user_id, "User")
        existing = self._schedules.get_by_id(user_id=user_id, schedule_id=require_positive_id(schedule_id, "Schedule"))
        if existing is None:
            raise NotFoundError("Work schedule not found")

        start, end = format_time_of_day(start_time), format_time_of_day(end_time)
        changed = replace(
            existing,
            work_date=work_date or existing.work_date,
            start_time=start,
            end_time=end,
            planned_hours=hours_between_times_of_day(start, end),
            description=existing.description if description is KEEP else optional_text(description, "Description"),
        )

        updated = self._schedules.update(schedule=changed)
        if updated is None:
            raise NotFoundError("Work schedule not found")
        return updated

    def delete(self, user_id: int, schedule_id: int) -> None:
        user_id = require_positive_id(user_id, "User")
        if not self._schedules.delete(user_id=user_id, schedule_id=require_positive_id(schedule_id, "Schedule")):
            raise NotFoundError("Work schedule not found")
        logger.info("User %s deleted schedule %s", user_id, schedule_id)

    def monthly(self, user_id: int, year: int, month: int) -> MonthlySchedules:
        schedules = list(self._schedules.list_by_month(user_id=require_positive_id(user_id, "User"), year=year, month=month))
        summary = compute_monthly_planned_summary(schedules, year=year, month=month)
        return MonthlySchedules(year=int(year), month=int(month), schedules=schedules, summary=summary)

    def for_date(self, user_id: int, work_date: date) -> Sequence[WorkSchedule]:
        return self._schedules.list_by_date(user_id=require_positive_id(user_id, "User"), work_date=work_date)

    @staticmethod
    def planned_hours_by_date(schedules: Sequence[WorkSchedule]) -> dict[date, float]:
        """Per-date planned hours (all blocks of a day added) for calendar cells."""
        out: dict[date, float] = defaultdict(float)
        for s in schedules:
            out[s.work_date] += float(s.planned_hours)
        return dict(out)
