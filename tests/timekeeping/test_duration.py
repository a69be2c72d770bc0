from datetime import datetime, time, timedelta

import pytest

from src.worktime_tracker.worktime_tracker.core.constants import NO_VALUE
from src.worktime_tracker.worktime_tracker.core.exceptions import ValidationError
from src.worktime_tracker.worktime_tracker.timekeeping.duration import (
    DurationParts,
    duration_parts,
    format_duration,
    hours_between_instants,
    hours_between_times_of_day,
    rollover_checkout,
)


def test_hours_between_instants_matches_millisecond_difference():
    start = datetime(2025, 1, 1, 9, 0, 0)
    end = start + timedelta(hours=2, minutes=17, seconds=3, milliseconds=250)

    ms = (end - start) // timedelta(milliseconds=1)
    assert hours_between_instants(start, end) == ms / 3_600_000
    assert hours_between_instants(start, end) >= 0


def test_hours_between_instants_is_negative_when_reversed():
    start = datetime(2025, 1, 1, 12, 0)
    end = datetime(2025, 1, 1, 9, 0)

    assert hours_between_instants(start, end) == -3.0


def test_hours_between_instants_spans_midnight_without_adjustment():
    assert hours_between_instants(datetime(2025, 1, 1, 22, 0), datetime(2025, 1, 2, 6, 0)) == 8.0


def test_times_of_day_regular_block():
    assert hours_between_times_of_day("09:00", "18:00") == 9.0


def test_times_of_day_overnight_rollover():
    assert hours_between_times_of_day("22:00", "06:00") == 8.0


@pytest.mark.parametrize("value", ["00:00", "09:30", "23:59"])
def test_times_of_day_equal_values_are_zero_not_full_day(value):
    assert hours_between_times_of_day(value, value) == 0


def test_times_of_day_rounds_to_two_decimals():
    # 20 minutes = 0.3333...
    assert hours_between_times_of_day("09:00", "09:20") == 0.33


def test_times_of_day_accepts_time_objects_and_seconds():
    assert hours_between_times_of_day(time(8, 30), "17:00:00") == 8.5


@pytest.mark.parametrize("bad", ["", "9", "24:00", "10:60", "ab:cd", None])
def test_times_of_day_rejects_malformed_values(bad):
    with pytest.raises(ValidationError):
        hours_between_times_of_day(bad, "10:00")


def test_rollover_checkout_only_moves_strictly_earlier_checkout():
    check_in = datetime(2025, 1, 1, 22, 0)

    assert rollover_checkout(check_in, datetime(2025, 1, 1, 6, 0)) == datetime(2025, 1, 2, 6, 0)
    assert rollover_checkout(check_in, check_in) == check_in


def test_duration_parts_splits_hours_and_minutes():
    assert duration_parts(1.5) == DurationParts(hours=1, minutes=30)


def test_duration_parts_carries_sixty_minutes():
    assert duration_parts(1.999) == DurationParts(hours=2, minutes=0)


def test_duration_parts_none_is_none():
    assert duration_parts(None) is None


def test_format_duration_full():
    assert format_duration(1.5, False) == "1 hour 30 minutes"
    assert format_duration(1.999, False) == "2 hours 0 minutes"


def test_format_duration_compact():
    assert format_duration(7.5, compact=True) == "7.5h"
    assert format_duration(1.999, compact=True) == "2.0h"


def test_format_duration_none_is_sentinel_not_zero():
    assert format_duration(None) == NO_VALUE
    assert format_duration(None, compact=True) == NO_VALUE
    assert format_duration(0) == "0 hours 0 minutes"
    assert format_duration(None) != format_duration(0)


def test_format_duration_keeps_sign():
    assert format_duration(-1.25) == "-1 hour 15 minutes"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_format_duration_non_finite_is_sentinel(value):
    assert duration_parts(value) is None
    assert format_duration(value) == NO_VALUE
    assert format_duration(value, compact=True) == NO_VALUE
