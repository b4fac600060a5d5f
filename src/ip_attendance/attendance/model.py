from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_iso, split_timestamp, to_iso
from ..core.enums import AttendanceStatus, ReasonCode


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one decision outcome. Immutable once created."""

    identity: str
    display_name: str
    observed_address: str
    expected_address: Optional[str]
    is_private: bool
    is_proxied: bool
    status: AttendanceStatus
    reason: ReasonCode
    timestamp: datetime

    def __post_init__(self) -> None:
        if (self.status == AttendanceStatus.PRESENT) != (self.reason == ReasonCode.ADDRESS_MATCHED):
            raise ValueError(f"status {self.status.value} is inconsistent with reason {self.reason.value}")

    @property
    def date(self) -> str:
        return split_timestamp(self.timestamp)[0]

    @property
    def time(self) -> str:
        return split_timestamp(self.timestamp)[1]

    def to_document(self) -> dict[str, Any]:
        return {
            "timestamp": to_iso(self.timestamp),
            "student_id": self.identity,
            "student_name": self.display_name,
            "status": self.status.value,
            "clientIp": self.observed_address,
            "allowedIp": self.expected_address,
            "isPrivate": self.is_private,
            "proxy": self.is_proxied,
            "reason": self.reason.value,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "AttendanceRecord":
        return cls(
            identity=str(doc.get("student_id") or ""),
            display_name=str(doc.get("student_name") or ""),
            observed_address=str(doc.get("clientIp") or ""),
            expected_address=doc.get("allowedIp") or None,
            is_private=bool(doc.get("isPrivate", False)),
            is_proxied=bool(doc.get("proxy", False)),
            status=AttendanceStatus(doc["status"]),
            reason=ReasonCode(doc["reason"]),
            timestamp=parse_iso(doc["timestamp"]),
        )


@dataclass(frozen=True)
class ReportRow:
    """Read-model matching the six spreadsheet columns."""

    identity: str
    display_name: str
    date: str
    time: str
    observed_address: str
    status: str

    @classmethod
    def from_record(cls, record: AttendanceRecord) -> "ReportRow":
        date_str, time_str = split_timestamp(record.timestamp)
        return cls(
            identity=record.identity,
            display_name=record.display_name,
            date=date_str,
            time=time_str,
            observed_address=record.observed_address,
            status=record.status.value,
        )

    def as_cells(self) -> tuple[str, str, str, str, str, str]:
        return (self.identity, self.display_name, self.date, self.time, self.observed_address, self.status)

    def to_api(self) -> dict[str, str]:
        return {
            "id": self.identity,
            "name": self.display_name,
            "date": self.date,
            "time": self.time,
            "ip": self.observed_address,
            "status": self.status,
        }


@dataclass(frozen=True)
class SubmissionOutcome:
    """What a submission returns to the HTTP layer.

    When ``already_marked`` is set, ``record`` is the freshly classified
    candidate that was not stored; ``marked_at`` is the stored one's time.
    """

    status: AttendanceStatus
    message: str
    record: AttendanceRecord
    already_marked: bool = False
    marked_at: Optional[datetime] = None
    degraded: bool = False

    def to_api(self) -> dict[str, Any]:
        record = self.record
        body: dict[str, Any] = {
            "message": self.message,
            "success": True,
            "status": self.status.value,
            "clientIp": record.observed_address,
            "expectedIp": record.expected_address,
            "isPrivate": record.is_private,
            "proxy": record.is_proxied,
            "reason": record.reason.value,
        }
        if self.already_marked:
            body["alreadyMarked"] = True
            body["markedAt"] = to_iso(self.marked_at) if self.marked_at else None
        if self.degraded:
            body["degraded"] = True
        return body
