from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from tests.fakes import FixedClock, InMemoryAttendanceStore

# Wednesday; its week starts on Sunday 2026-02-01.
TODAY = date(2026, 2, 4)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime.combine(TODAY, time(9, 0))


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def store() -> InMemoryAttendanceStore:
    return InMemoryAttendanceStore()


@pytest.fixture
def service(store, clock) -> AttendanceService:
    return AttendanceService(store, clock=clock)


@pytest.fixture
def today() -> date:
    return TODAY
