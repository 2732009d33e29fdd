from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.hours import round_hours
from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus

MONTHLY_TARGET_HOURS = 160  # 8 hours * 20 working days


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


def _percent(count: int, total: int) -> int:
    return int(math.floor(count / total * 100 + 0.5)) if total else 0


class TimesheetReportService:
    """Aggregations over stored attendance records.

    Open sessions contribute no hours here: their stored figures are only
    final once the session closes.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def build_timesheet(self, *, start: date, end: date, user_id: Optional[str] = None) -> ReportData:
        records = self._attendance.query_by_user_and_date_range(user_id, start, end)

        rows: list[dict] = []
        total_hours = 0.0
        counts = {status: 0 for status in AttendanceStatus}
        for r in records:
            hours = r.worked_hours() if r.is_closed else 0.0
            total_hours += hours
            counts[r.status] += 1
            rows.append(
                {
                    "date": r.date,
                    "clock_in": r.clock_in or "",
                    "clock_out": r.clock_out or "",
                    "total_hours": r.total_hours,
                    "total_break_time": r.total_break_time,
                    "net_work_hours": hours,
                    "status": r.status.value,
                    "notes": r.notes or "",
                }
            )

        working_days = counts[AttendanceStatus.PRESENT]
        summary = {
            "start": start.isoformat(),
            "end": end.isoformat(),
            "total_hours": round_hours(total_hours),
            "working_days": working_days,
            "average_hours": round_hours(total_hours / working_days) if working_days else 0.0,
            "attendance_rate": _percent(working_days, len(rows)),
            "breakdown": [
                {"status": status.value, "count": counts[status], "percentage": _percent(counts[status], len(rows))}
                for status in AttendanceStatus
            ],
        }
        return ReportData(rows=rows, summary=summary)

    def monthly_hours(self, *, year: int, user_id: Optional[str] = None) -> list[dict]:
        records = self._attendance.query_by_user_and_date_range(user_id, date(year, 1, 1), date(year, 12, 31))

        by_month = [0.0] * 12
        for r in records:
            if r.is_closed:
                by_month[int(r.date[5:7]) - 1] += r.worked_hours()

        return [
            {
                "month": calendar.month_abbr[i + 1],
                "hours": round_hours(hours),
                "target": MONTHLY_TARGET_HOURS,
            }
            for i, hours in enumerate(by_month)
        ]
