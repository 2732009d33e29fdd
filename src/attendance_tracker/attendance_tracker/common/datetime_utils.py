from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Protocol

from ..core.constants import CLOCK_FORMAT, DATE_FORMAT, WEEK_START_INDEX


class Clock(Protocol):
    """Source of the current instant.

    Every "today" / "now" comparison in the engine goes through a clock so
    tests can pin time.
    """

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    def now(self) -> datetime:
        return now_local()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_clock(value: datetime) -> str:
    """Minute-resolution 24h time-of-day, e.g. ``"09:05"``."""
    return value.strftime(CLOCK_FORMAT)


def week_start(today: date) -> date:
    """Most recent occurrence of the week-start weekday (today included)."""
    # date.weekday() is Monday=0; shift so Sunday=0.
    day_index = (today.weekday() + 1) % 7
    return today - timedelta(days=(day_index - WEEK_START_INDEX) % 7)


def month_bounds(today: date) -> tuple[date, date]:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)
