from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

import pytest

from src.worktime_tracker.worktime_tracker.attendance.model import TimeEntry
from src.worktime_tracker.worktime_tracker.attendance.service import TimeEntryService
from src.worktime_tracker.worktime_tracker.common.datetime_utils import FixedClock
from src.worktime_tracker.worktime_tracker.core.exceptions import NotFoundError, ValidationError
from tests.fakes import InMemoryTimeEntries


@pytest.fixture
def clock(fixed_now):
    return FixedClock(fixed_now)


@pytest.fixture
def repo():
    return InMemoryTimeEntries()


@pytest.fixture
def svc(repo, clock):
    return TimeEntryService(repo, clock=clock)


def test_check_in_creates_open_entry_for_today(svc, repo, fixed_now):
    entry = svc.check_in(1)

    assert entry.is_open
    assert entry.work_date == fixed_now.date()
    assert svc.today(1).state.checked_in is True


def test_check_in_twice_is_rejected(svc):
    svc.check_in(1)

    with pytest.raises(ValidationError):
        svc.check_in(1)


def test_check_out_records_working_hours(svc, clock, fixed_now):
    svc.check_in(1)
    clock.current = fixed_now + timedelta(hours=2, minutes=15)

    entry = svc.check_out(1)
    assert entry.check_out == clock.current
    assert entry.working_hours == 2.25
    assert svc.today(1).state.checked_in is False


def test_check_out_without_open_session_is_rejected(svc):
    with pytest.raises(ValidationError):
        svc.check_out(1)


def test_today_live_total_follows_clock(svc, clock, fixed_now):
    svc.check_in(1)
    clock.current = fixed_now + timedelta(minutes=30)
    first = svc.today(1).total_hours
    clock.current = fixed_now + timedelta(minutes=90)
    second = svc.today(1).total_hours

    assert first == 0.5
    assert second == 1.5
    assert svc.today(1).total_display == "1 hour 30 minutes"


def test_today_is_scoped_to_user(svc):
    svc.check_in(1)

    assert svc.today(2).state.checked_in is False
    assert svc.today(2).entries == []


def test_today_logs_stale_open_entries(clock, fixed_now, caplog):
    day = fixed_now.date()
    repo = InMemoryTimeEntries(
        [
            TimeEntry(entry_id=1, user_id=1, work_date=day, check_in=datetime(2025, 3, 14, 8, 0)),
            TimeEntry(entry_id=2, user_id=1, work_date=day, check_in=datetime(2025, 3, 14, 9, 0)),
        ]
    )
    svc = TimeEntryService(repo, clock=clock)

    with caplog.at_level(logging.WARNING):
        status = svc.today(1)

    assert status.state.open_entry.entry_id == 2
    assert status.state.is_inconsistent
    assert "stale open entries" in caplog.text


def test_edit_entry_applies_midnight_rollover(svc, repo):
    entry = svc.check_in(1)

    edited = svc.edit_entry(1, entry.entry_id, work_date=date(2025, 3, 13), check_in="22:00", check_out="06:00")
    assert edited.work_date == date(2025, 3, 13)
    assert edited.check_in == datetime(2025, 3, 13, 22, 0)
    assert edited.check_out == datetime(2025, 3, 14, 6, 0)
    assert edited.working_hours == 8.0
    assert repo.get_by_id(user_id=1, entry_id=entry.entry_id) == edited


def test_edit_entry_without_checkout_leaves_session_open(svc):
    entry = svc.check_in(1)

    edited = svc.edit_entry(1, entry.entry_id, work_date=date(2025, 3, 14), check_in="08:00")
    assert edited.is_open
    assert edited.working_hours is None


def test_edit_other_users_entry_is_not_found(svc):
    entry = svc.check_in(1)

    with pytest.raises(NotFoundError):
        svc.edit_entry(2, entry.entry_id, work_date=date(2025, 3, 14), check_in="08:00")


def test_edit_entry_rejects_bad_time(svc):
    entry = svc.check_in(1)

    with pytest.raises(ValidationError):
        svc.edit_entry(1, entry.entry_id, work_date=date(2025, 3, 14), check_in="8am")


def test_delete_entry(svc):
    entry = svc.check_in(1)
    svc.delete_entry(1, entry.entry_id)

    assert svc.today(1).entries == []
    with pytest.raises(NotFoundError):
        svc.delete_entry(1, entry.entry_id)


def test_history_newest_first(clock, fixed_now):
    repo = InMemoryTimeEntries(
        [
            TimeEntry(entry_id=1, user_id=1, work_date=date(2025, 3, 12), check_in=datetime(2025, 3, 12, 9, 0)),
            TimeEntry(entry_id=2, user_id=1, work_date=date(2025, 3, 13), check_in=datetime(2025, 3, 13, 9, 0)),
        ]
    )

    history = TimeEntryService(repo, clock=clock).history(1)
    assert [e.entry_id for e in history] == [2, 1]


def test_monthly_worked_hours_sums_closed_and_open(clock, fixed_now):
    repo = InMemoryTimeEntries(
        [
            TimeEntry(
                entry_id=1,
                user_id=1,
                work_date=date(2025, 3, 3),
                check_in=datetime(2025, 3, 3, 9, 0),
                check_out=datetime(2025, 3, 3, 17, 0),
                working_hours=8.0,
            ),
            TimeEntry(entry_id=2, user_id=1, work_date=date(2025, 3, 14), check_in=datetime(2025, 3, 14, 13, 0)),
        ]
    )

    assert TimeEntryService(repo, clock=clock).monthly_worked_hours(1, 2025, 3) == 9.5


def test_invalid_user_id_is_rejected(svc):
    with pytest.raises(ValidationError):
        svc.today(0)


class SteppingClock:
    """Advances by ``step`` on every read."""

    def __init__(self, start: datetime, step: timedelta):
        self.current = start
        self.step = step

    def now(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


def test_check_in_at_midnight_uses_one_instant(repo):
    clock = SteppingClock(datetime(2025, 3, 14, 23, 59, 59, 999_999), timedelta(microseconds=1))
    svc = TimeEntryService(repo, clock=clock)

    entry = svc.check_in(1)
    assert entry.check_in == datetime(2025, 3, 14, 23, 59, 59, 999_999)
    assert entry.work_date == entry.check_in.date()


def test_check_out_hours_match_stored_checkout(repo, fixed_now):
    svc = TimeEntryService(repo, clock=SteppingClock(fixed_now, timedelta(minutes=30)))
    svc.check_in(1)

    entry = svc.check_out(1)
    assert entry.working_hours == (entry.check_out - entry.check_in) / timedelta(hours=1)
