from __future__ import annotations

from datetime import date

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.reports.service import MONTHLY_TARGET_HOURS, TimesheetReportService

from tests.fakes import InMemoryAttendanceStore


class RecordingStore(InMemoryAttendanceStore):
    def __init__(self, records=()):
        super().__init__(records)
        self.last_args = None

    def query_by_user_and_date_range(self, user_id, start, end):
        self.last_args = {"user_id": user_id, "start": start, "end": end}
        return super().query_by_user_and_date_range(user_id, start, end)


def _rec(record_id, day, net, status=AttendanceStatus.PRESENT, clock_out="17:00", user_id="u1"):
    return AttendanceRecord(
        id=record_id,
        date=day,
        user_id=user_id,
        clock_in="09:00",
        clock_out=clock_out,
        total_hours=net or 0.0,
        net_work_hours=net,
        status=status,
    )


def test_timesheet_summary():
    store = RecordingStore(
        [
            _rec("1", "2026-01-05", 8.0),
            _rec("2", "2026-01-06", 7.5, status=AttendanceStatus.LATE),
            _rec("3", "2026-01-07", 8.25),
            _rec("4", "2026-01-08", 0.0, status=AttendanceStatus.ABSENT, clock_out=None),
        ]
    )
    svc = TimesheetReportService(store)

    report = svc.build_timesheet(start=date(2026, 1, 1), end=date(2026, 1, 31), user_id="u1")

    assert len(report.rows) == 4
    assert report.summary["total_hours"] == 23.75
    assert report.summary["working_days"] == 2
    assert report.summary["average_hours"] == 11.88
    assert report.summary["attendance_rate"] == 50
    breakdown = {b["status"]: (b["count"], b["percentage"]) for b in report.summary["breakdown"]}
    assert breakdown["present"] == (2, 50)
    assert breakdown["late"] == (1, 25)
    assert breakdown["absent"] == (1, 25)
    assert breakdown["early_leave"] == (0, 0)


def test_open_sessions_contribute_no_hours():
    store = RecordingStore(
        [AttendanceRecord(id="open", date="2026-01-05", user_id="u1", clock_in="09:00", total_hours=5.0, net_work_hours=5.0)]
    )

    report = TimesheetReportService(store).build_timesheet(start=date(2026, 1, 1), end=date(2026, 1, 31), user_id="u1")

    assert report.rows[0]["clock_out"] == ""
    assert report.rows[0]["net_work_hours"] == 0.0
    assert report.summary["total_hours"] == 0.0


def test_empty_timesheet():
    report = TimesheetReportService(RecordingStore()).build_timesheet(start=date(2026, 1, 1), end=date(2026, 1, 31))

    assert report.rows == []
    assert report.summary["average_hours"] == 0.0
    assert report.summary["attendance_rate"] == 0


def test_timesheet_forwards_user_filter():
    store = RecordingStore()

    TimesheetReportService(store).build_timesheet(start=date(2026, 1, 1), end=date(2026, 1, 31), user_id="u9")

    assert store.last_args == {"user_id": "u9", "start": date(2026, 1, 1), "end": date(2026, 1, 31)}


def test_monthly_hours_by_calendar_month():
    store = RecordingStore(
        [
            _rec("1", "2026-01-05", 8.0),
            _rec("2", "2026-01-20", 4.5),
            AttendanceRecord(id="legacy", date="2026-03-02", user_id="u1", clock_in="08:00", clock_out="16:00", total_hours=8.0, net_work_hours=None),
            _rec("other", "2026-03-03", 9.0, user_id="u2"),
        ]
    )

    months = TimesheetReportService(store).monthly_hours(year=2026, user_id="u1")

    assert len(months) == 12
    assert months[0] == {"month": "Jan", "hours": 12.5, "target": MONTHLY_TARGET_HOURS}
    assert months[1]["hours"] == 0.0
    assert months[2]["hours"] == 8.0
    assert store.last_args["start"] == date(2026, 1, 1)
    assert store.last_args["end"] == date(2026, 12, 31)
