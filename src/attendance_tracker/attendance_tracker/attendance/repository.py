from __future__ import annotations

from datetime import date
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from .model import AttendanceRecord

RecordPredicate = Callable[[AttendanceRecord], bool]


class AttendanceRepository(Protocol):
    """Record store consumed by the session engine.

    Implementations raise ``StoreUnavailable`` when the backing store fails.
    """

    def append(self, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def replace(self, predicate: RecordPredicate, record: AttendanceRecord) -> bool:
        """Replace the first record of ``record``'s user/date matching ``predicate``."""

        raise NotImplementedError

    def update(self, record_id: str, fields: Mapping[str, Any]) -> bool:
        """Partial update; ``fields`` are ``AttendanceRecord`` attribute names."""

        raise NotImplementedError

    def query_by_user_and_date_range(
        self,
        user_id: Optional[str],
        start: date,
        end: date,
    ) -> Sequence[AttendanceRecord]:
        """Records in ``[start, end]`` ordered by date, then creation."""

        raise NotImplementedError

    def find_open_sessions(self, *, up_to: date) -> Sequence[AttendanceRecord]:
        """Open records of every user dated on or before ``up_to``."""

        raise NotImplementedError
