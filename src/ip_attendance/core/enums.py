from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Outcome of a submission, stored verbatim in both stores."""

    PRESENT = "Present"
    ABSENT = "Absent"


class ReasonCode(str, Enum):
    """Why a submission got its status. Values are the persisted codes."""

    ADDRESS_MATCHED = "ip_matched"
    ADDRESS_MISMATCH = "ip_mismatch"
    PRIVATE_ADDRESS = "private_ip"
    NO_EXPECTED_ADDRESS = "missing_expected_ip"


class TableState(str, Enum):
    """Result of inspecting the tabular file before touching it."""

    VALID = "valid"
    MISSING = "missing"
    MALFORMED = "malformed"
