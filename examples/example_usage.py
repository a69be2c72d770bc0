"""Example: the time-accounting core and service layer without Flask.

The aggregator functions take plain records, so they can be fed from any
source; the service layer adds repositories and a clock.
"""

import importlib
from datetime import date, datetime

from config import get_settings_module

from src.worktime_tracker.worktime_tracker.attendance.model import TimeEntry
from src.worktime_tracker.worktime_tracker.container import build_container
from src.worktime_tracker.worktime_tracker.timekeeping.aggregator import compute_daily_total, derive_checked_in_state
from src.worktime_tracker.worktime_tracker.timekeeping.duration import format_duration


def offline_demo():
    entries = [
        TimeEntry(1, 1, date(2025, 3, 14), datetime(2025, 3, 14, 9, 0), datetime(2025, 3, 14, 12, 0), 3.0),
        TimeEntry(2, 1, date(2025, 3, 14), datetime(2025, 3, 14, 13, 0)),
    ]
    now = datetime(2025, 3, 14, 14, 30)
    print(derive_checked_in_state(entries).checked_in, format_duration(compute_daily_total(entries, now)))


def main():
    offline_demo()
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    status = container.time_entry_service.today(user_id=1)
    print(status.state.checked_in, status.total_display)


if __name__ == "__main__":
    main()
