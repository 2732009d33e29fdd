from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EARLY_LEAVE = "early_leave"


class SessionPhase(str, Enum):
    """Phase of a user's attendance session for one calendar day."""

    NOT_STARTED = "not_started"
    WORKING = "working"
    ON_BREAK = "on_break"
    CLOSED = "closed"


class RejectionReason(str, Enum):
    INVALID_STATE_FOR_OPERATION = "invalid_state_for_operation"
