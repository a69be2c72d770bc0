from __future__ import annotations

from datetime import date

import pytest

from src.worktime_tracker.worktime_tracker.core.exceptions import (
    NotFoundError,
    ScheduleOutsideMonthError,
    ValidationError,
)
from src.worktime_tracker.worktime_tracker.schedules.model import WorkSchedule
from src.worktime_tracker.worktime_tracker.schedules.service import ScheduleService
from tests.fakes import InMemorySchedules


@pytest.fixture
def repo():
    return InMemorySchedules()


@pytest.fixture
def svc(repo):
    return ScheduleService(repo)


def test_create_computes_planned_hours(svc):
    s = svc.create(1, work_date=date(2025, 3, 3), start_time="9:00", end_time="18:00", description="  office ")

    assert s.start_time == "09:00"
    assert s.planned_hours == 9.0
    assert s.description == "office"


def test_create_overnight_block(svc):
    s = svc.create(1, work_date=date(2025, 3, 3), start_time="22:00", end_time="06:00")

    assert s.planned_hours == 8.0


def test_create_rejects_bad_time(svc):
    with pytest.raises(ValidationError):
        svc.create(1, work_date=date(2025, 3, 3), start_time="25:00", end_time="06:00")


def test_blank_description_is_stored_as_none(svc):
    s = svc.create(1, work_date=date(2025, 3, 3), start_time="09:00", end_time="12:00", description="   ")

    assert s.description is None


def test_update_recomputes_planned_hours_from_times(svc, repo):
    s = svc.create(1, work_date=date(2025, 3, 3), start_time="09:00", end_time="18:00")

    updated = svc.update(1, s.schedule_id, start_time="10:00", end_time="12:30")
    assert updated.planned_hours == 2.5
    assert repo.get_by_id(user_id=1, schedule_id=s.schedule_id).planned_hours == 2.5


def test_update_missing_schedule(svc):
    with pytest.raises(NotFoundError):
        svc.update(1, 42, start_time="10:00", end_time="12:00")


def test_delete_is_owner_scoped(svc):
    s = svc.create(1, work_date=date(2025, 3, 3), start_time="09:00", end_time="18:00")

    with pytest.raises(NotFoundError):
        svc.delete(2, s.schedule_id)
    svc.delete(1, s.schedule_id)
    assert svc.for_date(1, date(2025, 3, 3)) == []


def test_monthly_summary(svc):
    svc.create(1, work_date=date(2025, 3, 3), start_time="09:00", end_time="12:00")
    svc.create(1, work_date=date(2025, 3, 3), start_time="13:00", end_time="18:00")
    svc.create(1, work_date=date(2025, 3, 4), start_time="09:00", end_time="13:00")
    svc.create(1, work_date=date(2025, 4, 1), start_time="09:00", end_time="13:00")

    result = svc.monthly(1, 2025, 3)
    assert len(result.schedules) == 3
    assert result.summary.total_hours == 12
    assert result.summary.day_count == 2
    assert result.summary.avg_hours_per_day == 6


def test_monthly_rejects_rows_outside_month():
    class LeakyRepo(InMemorySchedules):
        def list_by_month(self, *, user_id, year, month):
            return list(self._by_id.values())

    repo = LeakyRepo(
        [WorkSchedule(schedule_id=1, user_id=1, work_date=date(2025, 4, 1), start_time="09:00", end_time="17:00", planned_hours=8)]
    )

    with pytest.raises(ScheduleOutsideMonthError):
        ScheduleService(repo).monthly(1, 2025, 3)


def test_planned_hours_by_date_adds_blocks():
    schedules = [
        WorkSchedule(schedule_id=1, user_id=1, work_date=date(2025, 3, 3), start_time="09:00", end_time="12:00", planned_hours=3),
        WorkSchedule(schedule_id=2, user_id=1, work_date=date(2025, 3, 3), start_time="13:00", end_time="18:00", planned_hours=5),
        WorkSchedule(schedule_id=3, user_id=1, work_date=date(2025, 3, 4), start_time="09:00", end_time="13:00", planned_hours=4),
    ]

    assert ScheduleService.planned_hours_by_date(schedules) == {date(2025, 3, 3): 8.0, date(2025, 3, 4): 4.0}


def test_update_without_description_keeps_it(svc):
    s = svc.create(1, work_date=date(2025, 3, 3), start_time="09:00", end_time="18:00", description="office")

    assert svc.update(1, s.schedule_id, start_time="10:00", end_time="18:00").description == "office"
    assert svc.update(1, s.schedule_id, start_time="10:00", end_time="18:00", description=None).description is None
