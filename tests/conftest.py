from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pytest

from ip_attendance.attendance.model import AttendanceRecord, ReportRow
from ip_attendance.container import build_container
from ip_attendance.core.enums import TableState
from ip_attendance.core.exceptions import DocumentStoreFailure, TabularStoreReadFailure, TabularStoreWriteFailure
from ip_attendance.registry.model import ExpectedAddressEntry


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 15, 30, tzinfo=timezone.utc)


class InMemoryTabular:
    def __init__(self, *, fail_writes: bool = False, fail_reads: bool = False):
        self.rows: list[ReportRow] = []
        self.fail_writes = fail_writes
        self.fail_reads = fail_reads

    def inspect(self) -> TableState:
        return TableState.VALID if self.rows else TableState.MISSING

    def append(self, record: AttendanceRecord) -> None:
        if self.fail_writes:
            raise TabularStoreWriteFailure("disk full")
        self.rows.append(ReportRow.from_record(record))

    def read_all(self):
        if self.fail_reads:
            raise TabularStoreReadFailure("corrupted")
        return list(self.rows)


class InMemoryDocuments:
    def __init__(self, *, fail_writes: bool = False):
        self.records: list[AttendanceRecord] = []
        self.users: dict[str, ExpectedAddressEntry] = {}
        self.fail_writes = fail_writes

    def append(self, record: AttendanceRecord) -> None:
        if self.fail_writes:
            raise DocumentStoreFailure("read-only filesystem")
        self.records.append(record)

    def all_for_identity(self, identity: str):
        return [r for r in self.records if r.identity == identity]

    def all_records(self):
        return list(self.records)

    def set_expected(self, identity: str, address: str, *, updated_at: datetime) -> None:
        self.users[identity] = ExpectedAddressEntry(identity, address, updated_at)

    def get_expected(self, identity: str) -> Optional[str]:
        entry = self.users.get(identity)
        return entry.expected_address if entry else None

    def get_entry(self, identity: str) -> Optional[ExpectedAddressEntry]:
        return self.users.get(identity)


@pytest.fixture
def tabular() -> InMemoryTabular:
    return InMemoryTabular()


@pytest.fixture
def documents() -> InMemoryDocuments:
    return InMemoryDocuments()


@pytest.fixture
def container(tmp_path):
    return build_container(data_dir=tmp_path, admin_token="secret")
