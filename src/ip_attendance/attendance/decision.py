"""Presence rules.

Evaluated in order, first match wins:

1. private/loopback origin      -> Absent  (private_ip)
2. no expected address          -> Absent  (missing_expected_ip)
3. exact match with expectation -> Present (ip_matched)
4. anything else                -> Absent  (ip_mismatch)

Rule 1 comes first so that configuring a loopback expectation and testing
locally can never produce a Present.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus, ReasonCode


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    reason: ReasonCode


def decide(observed_address: str, is_private: bool, expected_address: Optional[str]) -> StatusDecision:
    if is_private:
        return StatusDecision(AttendanceStatus.ABSENT, ReasonCode.PRIVATE_ADDRESS)
    if not expected_address:
        return StatusDecision(AttendanceStatus.ABSENT, ReasonCode.NO_EXPECTED_ADDRESS)
    if observed_address == expected_address:
        return StatusDecision(AttendanceStatus.PRESENT, ReasonCode.ADDRESS_MATCHED)
    return StatusDecision(AttendanceStatus.ABSENT, ReasonCode.ADDRESS_MISMATCH)
