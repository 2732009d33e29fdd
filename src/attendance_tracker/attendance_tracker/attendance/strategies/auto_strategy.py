from __future__ import annotations

from datetime import datetime

from ...core.constants import CLOCK_FORMAT, DAY_END_CLOCK_OUT, DAY_END_ELAPSED
from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import ClosureDecision, ClosureStrategy


class AutoClosureStrategy(ClosureStrategy):
    """Forgotten clock-out closed at the end of the record's own day."""

    def decide(self, *, now: datetime, record: AttendanceRecord) -> ClosureDecision:
        return ClosureDecision(
            clock_out=DAY_END_CLOCK_OUT.strftime(CLOCK_FORMAT),
            elapsed_end=DAY_END_ELAPSED,
            status=AttendanceStatus.EARLY_LEAVE,
        )
