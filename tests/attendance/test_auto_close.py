from __future__ import annotations

from datetime import date

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.attendance.scheduler import AUTO_CLOSE_JOB_ID, build_scheduler, run_auto_close
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus, SessionPhase

USER = "u1"
YESTERDAY = date(2026, 2, 3)


def _open(record_id: str, day: date, user_id: str = USER, clock_in: str = "09:00") -> AttendanceRecord:
    return AttendanceRecord(id=record_id, date=day.isoformat(), user_id=user_id, clock_in=clock_in)


def test_day_end_closes_open_session(service, clock, store):
    service.clock_in(USER)
    clock.set("23:59")

    result = service.auto_close_at_day_end(USER)

    assert result.applied
    assert result.phase == SessionPhase.CLOSED
    rec = store.records[0]
    assert rec.clock_out == "23:59"
    assert rec.status == AttendanceStatus.EARLY_LEAVE
    # Hours run to 23:59:59 while the stored clock-out reads 23:59: 14.9997h rounds to 15.0.
    assert rec.total_hours == 15.0
    assert rec.total_break_time == 0.0
    assert rec.net_work_hours == 15.0


def test_day_end_closes_late_clock_in_against_end_of_day(service, clock, store):
    clock.set("21:30")
    service.clock_in(USER)
    clock.set("23:59:30")

    rec = service.auto_close_at_day_end(USER).record

    # 21:30 -> 23:59:59 is 2.4997h
    assert rec.total_hours == 2.5
    assert rec.clock_out == "23:59"


def test_day_end_before_2359_is_rejected(service, clock, store):
    service.clock_in(USER)
    clock.set("23:58:59")

    result = service.auto_close_at_day_end(USER)

    assert not result.applied
    assert result.phase == SessionPhase.WORKING
    assert store.records[0].clock_out is None


def test_day_end_is_idempotent(service, clock, store):
    service.clock_in(USER)
    clock.set("23:59")
    service.auto_close_at_day_end(USER)
    once = store.records[0]
    writes = list(store.writes)

    second = service.auto_close_at_day_end(USER)

    assert not second.applied
    assert store.records[0] == once
    assert store.writes == writes


def test_day_end_keeps_user_clock_out(service, clock, store):
    service.clock_in(USER)
    clock.set("17:00")
    service.clock_out(USER)
    clock.set("23:59")

    assert not service.auto_close_at_day_end(USER).applied
    assert store.records[0].status == AttendanceStatus.PRESENT
    assert store.records[0].clock_out == "17:00"


def test_day_end_ends_active_break_at_2359(service, clock, store):
    service.clock_in(USER)
    clock.set("22:00")
    service.start_break(USER)
    clock.set("23:59")

    rec = service.auto_close_at_day_end(USER).record

    assert rec.breaks[0].end_time == "23:59"
    assert rec.breaks[0].duration == 119
    assert rec.total_hours == 15.0
    assert rec.total_break_time == 1.98
    assert rec.net_work_hours == 13.02


def test_sweep_closes_past_sessions_of_every_user(service, clock, store, today):
    store.records.extend(
        [
            _open("a", YESTERDAY, user_id="alice"),
            _open("b", YESTERDAY, user_id="bob", clock_in="13:30"),
            _open("old", date(2026, 1, 30), user_id="alice"),
            _open("now", today, user_id="alice"),
        ]
    )
    clock.set("08:00")

    closed = service.auto_close_open_sessions()

    assert sorted(r.id for r in closed) == ["a", "b", "old"]
    assert store.get("b").clock_out == "23:59"
    assert store.get("b").total_hours == 10.5
    assert store.get("old").status == AttendanceStatus.EARLY_LEAVE
    assert store.get("now").clock_out is None


def test_sweep_at_2359_includes_today(service, clock, store, today):
    store.records.extend([_open("y", YESTERDAY), _open("t", today, user_id="bob")])
    clock.set("23:59")

    closed = service.auto_close_open_sessions()

    assert {r.id for r in closed} == {"y", "t"}
    assert store.get("t").status == AttendanceStatus.EARLY_LEAVE


def test_sweep_is_idempotent(service, clock, store):
    store.records.append(_open("y", YESTERDAY))
    service.auto_close_open_sessions()
    once = list(store.records)

    assert service.auto_close_open_sessions() == []
    assert store.records == once


def test_scheduler_registers_minute_job(service):
    scheduler = build_scheduler(service, scheduler=BackgroundScheduler())

    job = scheduler.get_job(AUTO_CLOSE_JOB_ID)
    assert job is not None
    assert isinstance(job.trigger, CronTrigger)
    assert job.max_instances == 1
    assert job.coalesce is True


def test_run_auto_close_counts_closed_sessions(service, store):
    store.records.append(_open("y", YESTERDAY))

    assert run_auto_close(service) == 1
    assert run_auto_close(service) == 0


def test_run_auto_close_survives_store_outage(service, store):
    store.records.append(_open("y", YESTERDAY))
    store.offline = True

    assert run_auto_close(service) == 0
    assert store.get("y").clock_out is None


def test_sweep_skips_malformed_record_and_closes_the_rest(service, clock, store):
    store.records.extend(
        [
            _open("bad", date(2026, 2, 2), clock_in="9h"),
            _open("good", YESTERDAY, user_id="bob"),
        ]
    )
    clock.set("08:00")

    closed = service.auto_close_open_sessions()

    assert [r.id for r in closed] == ["good"]
    assert store.get("good").clock_out == "23:59"
    assert store.get("bad").clock_out is None


def test_run_auto_close_counts_only_closed_records(service, store):
    store.records.extend([_open("bad", date(2026, 2, 2), clock_in="9h"), _open("good", YESTERDAY)])

    assert run_auto_close(service) == 1
    assert store.get("good").status == AttendanceStatus.EARLY_LEAVE
