from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import format_clock
from ..model import AttendanceRecord
from .base import ClosureDecision, ClosureStrategy


class ManualClosureStrategy(ClosureStrategy):
    """User clock-out at the current minute; status is kept."""

    def decide(self, *, now: datetime, record: AttendanceRecord) -> ClosureDecision:
        clock_out = format_clock(now)
        return ClosureDecision(
            clock_out=clock_out,
            elapsed_end=now.time().replace(second=0, microsecond=0),
            status=record.status,
        )
