from __future__ import annotations

from datetime import date, timezone
from typing import Callable, Optional, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class HistoryGuard:
    """At most one Present record per identity per UTC calendar day.

    Absent records are never counted; repeated failed attempts are all kept.
    """

    def __init__(self, history: Callable[[str], Sequence[AttendanceRecord]]):
        self._history = history

    def present_record_on(self, identity: str, day: date) -> Optional[AttendanceRecord]:
        for record in self._history(identity):
            if record.status == AttendanceStatus.PRESENT and record.timestamp.astimezone(timezone.utc).date() == day:
                return record
        return None

    def find_duplicate(self, identity: str, candidate: AttendanceRecord) -> Optional[AttendanceRecord]:
        """Existing Present record that suppresses ``candidate``, if any."""
        if candidate.status != AttendanceStatus.PRESENT:
            return None
        return self.present_record_on(identity, candidate.timestamp.astimezone(timezone.utc).date())
