from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord, ReportRow
from ..core.enums import TableState
from ..registry.model import ExpectedAddressEntry


class TabularStore(Protocol):
    def inspect(self) -> TableState:
        raise NotImplementedError

    def append(self, record: AttendanceRecord) -> None:
        """Append one row. Raises TabularStoreWriteFailure."""

        raise NotImplementedError

    def read_all(self) -> Sequence[ReportRow]:
        """All data rows in file order. Raises TabularStoreReadFailure."""

        raise NotImplementedError


class DocumentStore(Protocol):
    def append(self, record: AttendanceRecord) -> None:
        """Append one record. Raises DocumentStoreFailure."""

        raise NotImplementedError

    def all_for_identity(self, identity: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def all_records(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def set_expected(self, identity: str, address: str, *, updated_at: datetime) -> None:
        raise NotImplementedError

    def get_expected(self, identity: str) -> Optional[str]:
        raise NotImplementedError

    def get_entry(self, identity: str) -> Optional[ExpectedAddressEntry]:
        raise NotImplementedError
