from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..core.enums import AttendanceStatus, RejectionReason, SessionPhase


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class BreakRecord:
    """One break taken during an open work session.

    ``duration`` is whole minutes and only authoritative once ``end_time`` is set.
    """

    id: str
    start_time: str
    end_time: Optional[str] = None
    duration: int = 0

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "id": self.id,
            "startTime": self.start_time,
            "duration": self.duration,
        }
        if self.end_time is not None:
            doc["endTime"] = self.end_time
        return doc

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "BreakRecord":
        return cls(
            id=str(doc["id"]),
            start_time=str(doc["startTime"]),
            end_time=doc.get("endTime"),
            duration=int(doc.get("duration") or 0),
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar date.

    Hour fields are decimal hours rounded to 2 places. While ``clock_out`` is
    absent they are stale and must not be read as live figures.
    """

    id: str
    date: str
    user_id: Optional[str] = None
    clock_in: Optional[str] = None
    clock_out: Optional[str] = None
    breaks: tuple[BreakRecord, ...] = field(default_factory=tuple)
    total_hours: float = 0.0
    total_break_time: float = 0.0
    net_work_hours: Optional[float] = 0.0
    status: AttendanceStatus = AttendanceStatus.PRESENT
    notes: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None

    @property
    def is_closed(self) -> bool:
        return self.clock_out is not None

    @property
    def active_break(self) -> Optional[BreakRecord]:
        for b in self.breaks:
            if b.is_active:
                return b
        return None

    @property
    def phase(self) -> SessionPhase:
        if self.clock_in is None:
            return SessionPhase.NOT_STARTED
        if self.clock_out is not None:
            return SessionPhase.CLOSED
        if self.active_break is not None:
            return SessionPhase.ON_BREAK
        return SessionPhase.WORKING

    def worked_hours(self) -> float:
        """Stored hours worked, for records closed before break tracking existed too."""
        if self.net_work_hours is not None:
            return float(self.net_work_hours)
        return float(self.total_hours or 0.0)

    def to_document(self) -> dict[str, Any]:
        """Serialize using the field names the record store preserves round-trip."""
        doc: dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "breaks": [b.to_document() for b in self.breaks],
            "totalHours": self.total_hours,
            "totalBreakTime": self.total_break_time,
            "netWorkHours": self.net_work_hours,
            "status": self.status.value,
            "clockIn": self.clock_in,
            "clockOut": self.clock_out,
        }
        if self.user_id is not None:
            doc["userId"] = self.user_id
        if self.notes is not None:
            doc["notes"] = self.notes
        return doc

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "AttendanceRecord":
        net = doc.get("netWorkHours")
        return cls(
            id=str(doc["id"]),
            date=str(doc["date"]),
            user_id=doc.get("userId"),
            clock_in=doc.get("clockIn") or None,
            clock_out=doc.get("clockOut") or None,
            breaks=tuple(BreakRecord.from_document(b) for b in doc.get("breaks") or ()),
            total_hours=float(doc.get("totalHours") or 0.0),
            total_break_time=float(doc.get("totalBreakTime") or 0.0),
            net_work_hours=float(net) if net is not None else None,
            status=AttendanceStatus(doc.get("status") or AttendanceStatus.PRESENT.value),
            notes=doc.get("notes"),
        )


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a session mutation: applied, or rejected with a reason."""

    applied: bool
    phase: SessionPhase
    record: Optional[AttendanceRecord] = None
    reason: Optional[RejectionReason] = None

    @classmethod
    def ok(cls, record: AttendanceRecord) -> "OperationResult":
        return cls(applied=True, phase=record.phase, record=record)

    @classmethod
    def rejected(cls, phase: SessionPhase, record: Optional[AttendanceRecord]) -> "OperationResult":
        return cls(
            applied=False,
            phase=phase,
            record=record,
            reason=RejectionReason.INVALID_STATE_FOR_OPERATION,
        )
