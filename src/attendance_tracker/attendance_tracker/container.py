from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import ClosureStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock
from .database.bootstrap import as_db_config
from .database.connection import DatabaseConnection
from .reports.service import TimesheetReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    clock: Clock

    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService
    report_service: TimesheetReportService


def build_container(
    *,
    db_config: Optional[dict] = None,
    attendance_repo: Optional[AttendanceRepository] = None,
    clock: Optional[Clock] = None,
) -> Container:
    """Wire repositories and services.

    Pass ``attendance_repo`` to run against another record store; otherwise a
    MySQL store is built from ``db_config``.
    """
    conn = None
    if attendance_repo is None:
        if db_config is None:
            raise ValueError("db_config is required when no attendance_repo is given")
        conn = DatabaseConnection.get_instance(as_db_config(db_config))
        attendance_repo = MySQLAttendanceRepository(conn)

    clock = clock or SystemClock()
    attendance_service = AttendanceService(
        attendance_repo,
        clock=clock,
        strategy_factory=ClosureStrategyFactory(),
    )
    report_service = TimesheetReportService(attendance_repo)

    return Container(
        conn=conn,
        clock=clock,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        report_service=report_service,
    )
