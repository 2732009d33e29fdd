from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord


@dataclass(frozen=True)
class ClosureDecision:
    """How a session is closed.

    ``clock_out`` is the stored ``HH:MM``; ``elapsed_end`` is the instant the
    hours figure is measured against. An active break is ended at ``clock_out``.
    """

    clock_out: str
    elapsed_end: time
    status: AttendanceStatus


class ClosureStrategy(ABC):
    """Strategy Pattern: encapsulate how an open session gets closed."""

    @abstractmethod
    def decide(self, *, now: datetime, record: AttendanceRecord) -> ClosureDecision:
        raise NotImplementedError
