"""JSON document store: the durability point and the fallback source of truth.

Layout::

    {"users": {identity: {"expectedIp": str, "updatedAt": iso}},
     "attendance": [record, ...]}

The document is loaded once; a missing or unparseable file loads as empty.
Writes are serialized by a store-wide lock and swapped in atomically. Reads
work on the in-memory snapshot and take no lock.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import parse_iso, to_iso
from ..core.exceptions import DocumentStoreFailure
from ..registry.model import ExpectedAddressEntry

logger = logging.getLogger(__name__)


class JsonDocumentStore:
    def __init__(self, path: Path | str):
        self._path = Path(path)
        self._write_lock = threading.Lock()
        self._users: dict[str, dict[str, Any]] = {}
        self._documents: list[dict[str, Any]] = []
        self._records: list[AttendanceRecord] = []
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            logger.info("%s not found, starting with an empty database", self._path)
            return

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not load %s (%s), starting with an empty database", self._path, exc)
            return
        if not isinstance(data, dict):
            logger.warning("%s does not hold a JSON object, starting with an empty database", self._path)
            return

        users = data.get("users")
        attendance = data.get("attendance")
        self._users = dict(users) if isinstance(users, dict) else {}
        self._documents = [d for d in attendance if isinstance(d, dict)] if isinstance(attendance, list) else []
        self._records = [r for r in map(_parse_record, self._documents) if r is not None]

    def _persist(self, users: dict[str, Any], documents: list[dict[str, Any]]) -> None:
        try:
            payload = json.dumps({"users": users, "attendance": documents}, indent=2)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(suffix=".json", dir=self._path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self._path)
            except OSError:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise DocumentStoreFailure(f"Failed to save to database: {exc}") from exc

    # attendance records

    def append(self, record: AttendanceRecord) -> None:
        document = record.to_document()
        with self._write_lock:
            documents = self._documents + [document]
            self._persist(self._users, documents)
            self._documents = documents
            self._records = self._records + [record]
        logger.info("Attendance recorded for %s", record.identity)

    def all_records(self) -> list[AttendanceRecord]:
        return list(self._records)

    def all_for_identity(self, identity: str) -> list[AttendanceRecord]:
        return [r for r in self._records if r.identity == identity]

    # expected addresses

    def set_expected(self, identity: str, address: str, *, updated_at: datetime) -> None:
        with self._write_lock:
            users = dict(self._users)
            users[identity] = {"expectedIp": address, "updatedAt": to_iso(updated_at)}
            self._persist(users, self._documents)
            self._users = users
        logger.info("Expected address set for %s: %s", identity, address)

    def get_expected(self, identity: str) -> Optional[str]:
        entry = self._users.get(identity)
        if not isinstance(entry, dict):
            return None
        return entry.get("expectedIp") or None

    def get_entry(self, identity: str) -> Optional[ExpectedAddressEntry]:
        entry = self._users.get(identity)
        if not isinstance(entry, dict) or not entry.get("expectedIp"):
            return None
        try:
            updated_at = parse_iso(entry["updatedAt"])
        except (KeyError, TypeError, ValueError):
            updated_at = None
        return ExpectedAddressEntry(identity=identity, expected_address=entry["expectedIp"], updated_at=updated_at)


def _parse_record(document: dict[str, Any]) -> Optional[AttendanceRecord]:
    try:
        return AttendanceRecord.from_document(document)
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Skipping unreadable attendance record %r: %s", document, exc)
        return None
