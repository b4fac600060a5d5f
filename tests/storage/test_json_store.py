from __future__ import annotations

import json
from datetime import timedelta

import pytest

from ip_attendance.attendance.model import AttendanceRecord
from ip_attendance.core.enums import AttendanceStatus, ReasonCode
from ip_attendance.core.exceptions import DocumentStoreFailure
from ip_attendance.storage.json_store import JsonDocumentStore


def _record(fixed_now, identity="U001"):
    return AttendanceRecord(
        identity=identity,
        display_name="Ada",
        observed_address="198.51.100.4",
        expected_address=None,
        is_private=False,
        is_proxied=True,
        status=AttendanceStatus.ABSENT,
        reason=ReasonCode.NO_EXPECTED_ADDRESS,
        timestamp=fixed_now,
    )


def test_missing_file_loads_empty(tmp_path):
    store = JsonDocumentStore(tmp_path / "db.json")

    assert store.all_records() == []
    assert store.get_expected("U001") is None


def test_corrupted_file_loads_empty(tmp_path):
    path = tmp_path / "db.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonDocumentStore(path)

    assert store.all_records() == []


def test_append_is_persisted_with_full_fidelity(tmp_path, fixed_now):
    path = tmp_path / "db.json"
    store = JsonDocumentStore(path)
    record = _record(fixed_now)

    store.append(record)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["attendance"] == [{
        "timestamp": "2026-03-02T09:15:30.000Z",
        "student_id": "U001",
        "student_name": "Ada",
        "status": "Absent",
        "clientIp": "198.51.100.4",
        "allowedIp": None,
        "isPrivate": False,
        "proxy": True,
        "reason": "missing_expected_ip",
    }]
    assert JsonDocumentStore(path).all_records() == [record]


def test_filters_by_identity(tmp_path, fixed_now):
    store = JsonDocumentStore(tmp_path / "db.json")
    store.append(_record(fixed_now, "U001"))
    store.append(_record(fixed_now + timedelta(minutes=1), "U002"))
    store.append(_record(fixed_now + timedelta(minutes=2), "U001"))

    assert len(store.all_for_identity("U001")) == 2
    assert len(store.all_records()) == 3


def test_expected_address_last_write_wins(tmp_path, fixed_now):
    path = tmp_path / "db.json"
    store = JsonDocumentStore(path)

    store.set_expected("U002", "203.0.113.9", updated_at=fixed_now)
    store.set_expected("U002", "203.0.113.10", updated_at=fixed_now + timedelta(hours=1))

    reloaded = JsonDocumentStore(path)
    assert reloaded.get_expected("U002") == "203.0.113.10"
    assert reloaded.get_entry("U002").updated_at == fixed_now + timedelta(hours=1)


def test_unreadable_records_are_skipped_on_load(tmp_path, fixed_now):
    path = tmp_path / "db.json"
    good = _record(fixed_now).to_document()
    path.write_text(json.dumps({"users": {}, "attendance": [{"student_id": "X"}, good]}), encoding="utf-8")

    assert [r.identity for r in JsonDocumentStore(path).all_records()] == ["U001"]


def test_write_failure_raises_and_keeps_memory_unchanged(tmp_path, fixed_now):
    path = tmp_path / "db.json"
    path.mkdir()
    store = JsonDocumentStore(path)

    with pytest.raises(DocumentStoreFailure):
        store.append(_record(fixed_now))

    assert store.all_records() == []
