"""Hour and break arithmetic for attendance records.

Times are ``HH:MM`` strings anchored to the record's ``YYYY-MM-DD`` date.
Session durations are not clamped: a clock-out earlier than the clock-in
yields negative hours, and breaks longer than the session yield negative
net hours. Break durations are clamped at zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, time
from typing import Iterable, Optional, Union

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_clock
from ..core.constants import HOURS_PRECISION
from .model import BreakRecord

ClockValue = Union[str, time]


@dataclass(frozen=True)
class SessionTotals:
    total_hours: float
    total_break_time: float
    net_work_hours: float


def round_hours(value: float, places: int = HOURS_PRECISION) -> float:
    """Round half towards +inf to ``places`` decimals (-0.005 rounds to 0.0)."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def at(day: str, clock: ClockValue) -> datetime:
    """Combine a record date with a time-of-day."""
    t = clock if isinstance(clock, time) else require_clock(clock, "time")
    return datetime.combine(parse_iso_date(day), t)


def elapsed_hours(day: str, start: ClockValue, end: Union[ClockValue, datetime]) -> float:
    end_dt = end if isinstance(end, datetime) else at(day, end)
    return (end_dt - at(day, start)).total_seconds() / 3600


def break_duration_minutes(day: str, start: ClockValue, end: Union[ClockValue, datetime]) -> int:
    """Whole minutes between break start and end, never negative."""
    end_dt = end if isinstance(end, datetime) else at(day, end)
    minutes = (end_dt - at(day, start)).total_seconds() / 60
    return max(int(round(minutes)), 0)


def break_minutes(day: str, breaks: Iterable[BreakRecord], *, now: Optional[datetime] = None) -> float:
    """Total break minutes, estimating any active break against ``now``.

    Without ``now`` an active break contributes its stored duration (0).
    """
    total = 0.0
    for b in breaks:
        if b.end_time is None and now is not None:
            total += max((now - at(day, b.start_time)).total_seconds() / 60, 0.0)
        else:
            total += b.duration
    return total


def compute_totals(day: str, clock_in: ClockValue, end: ClockValue, breaks: Iterable[BreakRecord]) -> SessionTotals:
    """Totals for a session closing at ``end``; every break must already be ended."""
    total_hours = round_hours(elapsed_hours(day, clock_in, end))
    total_break_time = round_hours(sum(b.duration for b in breaks) / 60)
    return SessionTotals(
        total_hours=total_hours,
        total_break_time=total_break_time,
        net_work_hours=round_hours(total_hours - total_break_time),
    )


def live_net_hours(day: str, clock_in: ClockValue, breaks: Iterable[BreakRecord], *, now: datetime) -> float:
    """Running hours worked for an open session, floored at zero."""
    worked = elapsed_hours(day, clock_in, now) - break_minutes(day, breaks, now=now) / 60
    return max(round_hours(worked), 0.0)
