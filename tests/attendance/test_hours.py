from datetime import date, datetime, time

import pytest

from src.attendance_tracker.attendance_tracker.attendance.hours import (
    break_duration_minutes,
    break_minutes,
    compute_totals,
    elapsed_hours,
    live_net_hours,
    round_hours,
)
from src.attendance_tracker.attendance_tracker.attendance.model import BreakRecord
from src.attendance_tracker.attendance_tracker.common.datetime_utils import month_bounds, week_start
from src.attendance_tracker.attendance_tracker.core.exceptions import ValidationError

DAY = "2026-02-04"


def test_round_hours_rounds_half_up():
    assert round_hours(8.125) == 8.13
    assert round_hours(14.99972) == 15.0
    assert round_hours(0.58333) == 0.58
    assert round_hours(-0.005) == 0.0


def test_elapsed_hours_is_not_clamped():
    assert elapsed_hours(DAY, "09:00", "17:30") == 8.5
    assert elapsed_hours(DAY, "18:00", "09:00") == -9.0
    assert elapsed_hours(DAY, "09:00", time(23, 59, 59)) == pytest.approx(14.99972, abs=1e-5)


def test_break_duration_is_clamped_at_zero():
    assert break_duration_minutes(DAY, "12:00", "12:30") == 30
    assert break_duration_minutes(DAY, "12:30", "12:00") == 0


def test_break_minutes_estimates_active_break():
    breaks = [
        BreakRecord(id="b1", start_time="10:00", end_time="10:15", duration=15),
        BreakRecord(id="b2", start_time="12:00"),
    ]

    assert break_minutes(DAY, breaks) == 15
    assert break_minutes(DAY, breaks, now=datetime(2026, 2, 4, 12, 20)) == 35


def test_compute_totals():
    breaks = [BreakRecord(id="b1", start_time="12:00", end_time="12:30", duration=30)]

    totals = compute_totals(DAY, "09:00", "17:30", breaks)

    assert (totals.total_hours, totals.total_break_time, totals.net_work_hours) == (8.5, 0.5, 8.0)


def test_live_net_hours_floors_at_zero():
    breaks = [BreakRecord(id="b1", start_time="08:00")]

    assert live_net_hours(DAY, "09:00", breaks, now=datetime(2026, 2, 4, 9, 30)) == 0.0


def test_invalid_clock_string_raises():
    with pytest.raises(ValidationError):
        elapsed_hours(DAY, "9h", "17:00")


@pytest.mark.parametrize(
    "today,expected",
    [
        (date(2026, 2, 1), date(2026, 2, 1)),  # Sunday
        (date(2026, 2, 2), date(2026, 2, 1)),  # Monday
        (date(2026, 2, 7), date(2026, 2, 1)),  # Saturday
        (date(2026, 3, 3), date(2026, 3, 1)),
    ],
)
def test_week_start_is_most_recent_sunday(today, expected):
    assert week_start(today) == expected


def test_month_bounds():
    assert month_bounds(date(2024, 2, 14)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(date(2026, 12, 31)) == (date(2026, 12, 1), date(2026, 12, 31))
