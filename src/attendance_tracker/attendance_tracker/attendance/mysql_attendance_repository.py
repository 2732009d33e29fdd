from __future__ import annotations

import json
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date, normalize_mysql_decimal
from .model import AttendanceRecord, BreakRecord
from .repository import AttendanceRepository, RecordPredicate

_SELECT = """
    SELECT record_id, user_id, work_date, clock_in, clock_out, breaks,
           total_hours, total_break_time, net_work_hours, status, notes
    FROM attendance_records
"""

# AttendanceRecord attribute -> column
_COLUMNS = {
    "user_id": "user_id",
    "date": "work_date",
    "clock_in": "clock_in",
    "clock_out": "clock_out",
    "breaks": "breaks",
    "total_hours": "total_hours",
    "total_break_time": "total_break_time",
    "net_work_hours": "net_work_hours",
    "status": "status",
    "notes": "notes",
}


def _to_column_value(field: str, value: Any) -> Any:
    if field == "breaks":
        return json.dumps([b.to_document() for b in value])
    if field == "status":
        return AttendanceStatus(value).value
    return value


def _from_row(r: Mapping[str, Any]) -> AttendanceRecord:
    raw_breaks = r.get("breaks") or "[]"
    if isinstance(raw_breaks, (bytes, bytearray)):
        raw_breaks = raw_breaks.decode("utf-8")
    if isinstance(raw_breaks, str):
        raw_breaks = json.loads(raw_breaks)

    return AttendanceRecord(
        id=str(r["record_id"]),
        date=normalize_mysql_date(r["work_date"]),
        user_id=r.get("user_id"),
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        breaks=tuple(BreakRecord.from_document(b) for b in raw_breaks),
        total_hours=normalize_mysql_decimal(r.get("total_hours")) or 0.0,
        total_break_time=normalize_mysql_decimal(r.get("total_break_time")) or 0.0,
        net_work_hours=normalize_mysql_decimal(r.get("net_work_hours")),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    record_id, user_id, work_date, clock_in, clock_out, breaks,
                    total_hours, total_break_time, net_work_hours, status, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.id,
                    record.user_id,
                    record.date,
                    record.clock_in,
                    record.clock_out,
                    _to_column_value("breaks", record.breaks),
                    record.total_hours,
                    record.total_break_time,
                    record.net_work_hours,
                    record.status.value,
                    record.notes,
                ),
            )

    def replace(self, predicate: RecordPredicate, record: AttendanceRecord) -> bool:
        day = parse_iso_date(record.date)
        candidates = self.query_by_user_and_date_range(record.user_id, day, day)
        target = next((c for c in candidates if predicate(c)), None)
        if target is None:
            return False

        fields = {name: getattr(record, name) for name in _COLUMNS}
        with db_cursor(self._conn_factory) as (_, cur):
            assignments = ", ".join(f"{_COLUMNS[name]}=%s" for name in fields)
            cur.execute(
                f"UPDATE attendance_records SET record_id=%s, {assignments} WHERE record_id=%s",
                (record.id, *(_to_column_value(n, v) for n, v in fields.items()), target.id),
            )
            return cur.rowcount > 0

    def update(self, record_id: str, fields: Mapping[str, Any]) -> bool:
        unknown = set(fields) - set(_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown attendance fields: {sorted(unknown)}")
        if not fields:
            return True

        assignments = ", ".join(f"{_COLUMNS[name]}=%s" for name in fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_records SET {assignments} WHERE record_id=%s",
                (*(_to_column_value(n, v) for n, v in fields.items()), record_id),
            )
            # MySQL reports 0 affected rows when values are unchanged; check existence instead.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM attendance_records WHERE record_id=%s", (record_id,))
            return bool(fetchall(cur))

    def query_by_user_and_date_range(
        self,
        user_id: Optional[str],
        start: date,
        end: date,
    ) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE user_id <=> %s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, seq ASC
                """,
                (user_id, start, end),
            )
            return [_from_row(r) for r in fetchall(cur)]

    def find_open_sessions(self, *, up_to: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE clock_in IS NOT NULL AND clock_out IS NULL AND work_date <= %s
                ORDER BY work_date ASC, seq ASC
                """,
                (up_to,),
            )
            return [_from_row(r) for r in fetchall(cur)]
