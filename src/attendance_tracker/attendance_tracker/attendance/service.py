from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Any, Optional, Sequence

from ..common.datetime_utils import Clock, SystemClock, format_clock, format_iso_date, month_bounds, week_start
from ..core.constants import DAY_END_CLOCK_OUT, DEFAULT_HISTORY_DAYS, DEFAULT_RECENT_ACTIVITY_LIMIT, IN_PROGRESS_LABEL
from ..core.enums import SessionPhase
from ..core.exceptions import StoreUnavailable, ValidationError
from .factory import ClosureStrategyFactory
from .hours import break_duration_minutes, compute_totals, live_net_hours, round_hours
from .model import AttendanceRecord, BreakRecord, OperationResult, new_id
from .repository import AttendanceRepository
from .strategies.base import ClosureStrategy

logger = logging.getLogger(__name__)


def pick_day_record(records: Sequence[AttendanceRecord]) -> Optional[AttendanceRecord]:
    """Resolve a day's record when the store holds several: the open one wins, else the last."""
    if not records:
        return None
    for r in records:
        if r.is_open:
            return r
    return records[-1]


class AttendanceService:
    """Attendance session engine.

    Owns the per-day lifecycle of a user's record:
    NOT_STARTED -> WORKING <-> ON_BREAK -> CLOSED.

    Mutations return an ``OperationResult``; an operation invoked in the
    wrong phase is rejected without touching the store. Store failures
    surface as ``StoreUnavailable``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        clock: Clock | None = None,
        strategy_factory: ClosureStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._clock = clock or SystemClock()
        self._factory = strategy_factory or ClosureStrategyFactory()

    def _now(self) -> datetime:
        return self._clock.now()

    def _record_for(self, user_id: Optional[str], day: date) -> Optional[AttendanceRecord]:
        return pick_day_record(self._attendance.query_by_user_and_date_range(user_id, day, day))

    def _reject(self, operation: str, record: Optional[AttendanceRecord]) -> OperationResult:
        phase = record.phase if record else SessionPhase.NOT_STARTED
        logger.debug("%s rejected: phase=%s record=%s", operation, phase.value, record.id if record else None)
        return OperationResult.rejected(phase, record)

    def _update(self, record: AttendanceRecord, **fields: Any) -> AttendanceRecord:
        if not self._attendance.update(record.id, fields):
            raise StoreUnavailable(f"attendance record {record.id} could not be updated")
        return replace(record, **fields)

    # ---- queries ----

    def today_record(self, user_id: Optional[str] = None) -> Optional[AttendanceRecord]:
        return self._record_for(user_id, self._now().date())

    def current_phase(self, user_id: Optional[str] = None) -> SessionPhase:
        record = self.today_record(user_id)
        return record.phase if record else SessionPhase.NOT_STARTED

    def current_working_hours(self, user_id: Optional[str] = None) -> float:
        now = self._now()
        record = self._record_for(user_id, now.date())
        if not record or record.clock_in is None:
            return 0.0
        if record.is_open:
            return live_net_hours(record.date, record.clock_in, record.breaks, now=now)
        return record.worked_hours()

    def weekly_hours(self, user_id: Optional[str] = None) -> float:
        now = self._now()
        start = week_start(now.date())
        return self._hours_in_window(user_id, start, start + timedelta(days=6), now=now)

    def monthly_hours(self, user_id: Optional[str] = None) -> float:
        now = self._now()
        start, end = month_bounds(now.date())
        return self._hours_in_window(user_id, start, end, now=now)

    def _hours_in_window(self, user_id: Optional[str], start: date, end: date, *, now: datetime) -> float:
        # Closed records count their stored figure; today's open record counts live.
        today = format_iso_date(now.date())
        total = 0.0
        for r in self._attendance.query_by_user_and_date_range(user_id, start, end):
            if r.is_closed:
                total += r.worked_hours()
            elif r.is_open and r.date == today:
                total += live_net_hours(r.date, r.clock_in, r.breaks, now=now)
        return round_hours(total)

    def recent_activity(
        self,
        user_id: Optional[str] = None,
        *,
        limit: int = DEFAULT_RECENT_ACTIVITY_LIMIT,
        days: int = DEFAULT_HISTORY_DAYS,
    ) -> list[dict]:
        now = self._now()
        today = now.date()
        rows = self._attendance.query_by_user_and_date_range(user_id, today - timedelta(days=days), today)
        out = []
        for r in list(rows)[-limit:][::-1]:
            if r.is_open:
                hours = live_net_hours(r.date, r.clock_in, r.breaks, now=now) if r.date == format_iso_date(today) else 0.0
            else:
                hours = r.worked_hours()
            out.append(
                {
                    "date": r.date,
                    "clock_in": r.clock_in or "-",
                    "clock_out": r.clock_out or IN_PROGRESS_LABEL,
                    "hours": hours,
                    "status": r.status.value,
                }
            )
        return out

    def dashboard(self, user_id: Optional[str] = None) -> dict:
        record = self.today_record(user_id)
        return {
            "phase": (record.phase if record else SessionPhase.NOT_STARTED).value,
            "record": record.to_document() if record else None,
            "today_hours": self.current_working_hours(user_id),
            "weekly_hours": self.weekly_hours(user_id),
            "monthly_hours": self.monthly_hours(user_id),
            "recent_activity": self.recent_activity(user_id),
        }

    # ---- mutations ----

    def clock_in(self, user_id: Optional[str] = None) -> OperationResult:
        now = self._now()
        existing = self._record_for(user_id, now.date())
        if existing and existing.phase != SessionPhase.NOT_STARTED:
            return self._reject("clock_in", existing)

        record = AttendanceRecord(
            id=existing.id if existing else new_id(),
            date=format_iso_date(now.date()),
            user_id=user_id,
            clock_in=format_clock(now),
        )
        if existing:
            # A placeholder record for today (no clock-in yet) is reused rather than duplicated.
            if not self._attendance.replace(lambda r: r.clock_in is None, record):
                # Someone clocked in on the placeholder since it was read.
                return self._reject("clock_in", self._record_for(user_id, now.date()))
        else:
            self._attendance.append(record)

        logger.info("clock_in user=%s date=%s at=%s", user_id, record.date, record.clock_in)
        return OperationResult.ok(record)

    def clock_out(self, user_id: Optional[str] = None) -> OperationResult:
        now = self._now()
        record = self._record_for(user_id, now.date())
        if not record or record.phase not in (SessionPhase.WORKING, SessionPhase.ON_BREAK):
            return self._reject("clock_out", record)

        closed = self._close(record, self._factory.for_clock_out(), now=now)
        logger.info(
            "clock_out user=%s date=%s at=%s net_hours=%s",
            user_id,
            closed.date,
            closed.clock_out,
            closed.net_work_hours,
        )
        return OperationResult.ok(closed)

    def start_break(self, user_id: Optional[str] = None) -> OperationResult:
        now = self._now()
        record = self._record_for(user_id, now.date())
        if not record or record.phase != SessionPhase.WORKING:
            return self._reject("start_break", record)

        new_break = BreakRecord(id=new_id(), start_time=format_clock(now))
        updated = self._update(record, breaks=record.breaks + (new_break,))
        logger.info("start_break user=%s date=%s at=%s", user_id, record.date, new_break.start_time)
        return OperationResult.ok(updated)

    def end_break(self, user_id: Optional[str] = None) -> OperationResult:
        now = self._now()
        record = self._record_for(user_id, now.date())
        if not record or record.phase != SessionPhase.ON_BREAK:
            return self._reject("end_break", record)

        updated = self._update(record, breaks=self._end_active_break(record, format_clock(now)))
        logger.info("end_break user=%s date=%s at=%s", user_id, record.date, format_clock(now))
        return OperationResult.ok(updated)

    def auto_close_at_day_end(self, user_id: Optional[str] = None) -> OperationResult:
        """Close today's open session once the clock reaches 23:59.

        Idempotent: a record that is already closed is never recomputed.
        """
        now = self._now()
        record = self._record_for(user_id, now.date())
        if now.time() < DAY_END_CLOCK_OUT or not record or not record.is_open:
            return self._reject("auto_close_at_day_end", record)

        closed = self._close(record, self._factory.for_day_end(), now=now)
        logger.info("auto clock-out user=%s date=%s total_hours=%s", user_id, closed.date, closed.total_hours)
        return OperationResult.ok(closed)

    def auto_close_open_sessions(self) -> list[AttendanceRecord]:
        """Sweep every user's forgotten sessions.

        Records dated before today are always closed; today's are closed only
        once the clock reaches 23:59.
        """
        now = self._now()
        today = now.date()
        up_to = today if now.time() >= DAY_END_CLOCK_OUT else today - timedelta(days=1)

        strategy = self._factory.for_day_end()
        closed: list[AttendanceRecord] = []
        skipped = 0
        for record in self._attendance.find_open_sessions(up_to=up_to):
            if not record.is_open:
                continue
            try:
                closed.append(self._close(record, strategy, now=now))
            except ValidationError as e:
                # A malformed record must not hold back the rest of the sweep.
                skipped += 1
                logger.error("Auto clock-out skipped record=%s user=%s: %s", record.id, record.user_id, e)
        logger.info("Auto clock-out completed. %d records updated.", len(closed))
        if skipped:
            logger.warning("Auto clock-out left %d malformed records open.", skipped)
        return closed

    # ---- internals ----

    def _end_active_break(self, record: AttendanceRecord, end_time: str) -> tuple[BreakRecord, ...]:
        return tuple(
            replace(b, end_time=end_time, duration=break_duration_minutes(record.date, b.start_time, end_time))
            if b.is_active
            else b
            for b in record.breaks
        )

    def _close(self, record: AttendanceRecord, strategy: ClosureStrategy, *, now: datetime) -> AttendanceRecord:
        decision = strategy.decide(now=now, record=record)
        breaks = self._end_active_break(record, decision.clock_out)
        totals = compute_totals(record.date, record.clock_in, decision.elapsed_end, breaks)
        return self._update(
            record,
            clock_out=decision.clock_out,
            breaks=breaks,
            total_hours=totals.total_hours,
            total_break_time=totals.total_break_time,
            net_work_hours=totals.net_work_hours,
            status=decision.status,
        )
