from __future__ import annotations

import logging
import secrets
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus
from ..network.classifier import classify, describe
from ..registry.service import ExpectedAddressRegistry
from ..storage.coordinator import PersistenceCoordinator
from ..storage.locks import IdentityLocks
from .decision import decide
from .history import HistoryGuard
from .model import AttendanceRecord, ReportRow, SubmissionOutcome

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        registry: ExpectedAddressRegistry,
        coordinator: PersistenceCoordinator,
        *,
        locks: IdentityLocks | None = None,
    ):
        self._registry = registry
        self._coordinator = coordinator
        self._guard = HistoryGuard(coordinator.history_for)
        self._locks = locks or IdentityLocks()

    def submit(
        self,
        identity: str,
        display_name: str,
        *,
        forwarded_for: Optional[str] = None,
        peer_address: Optional[str] = None,
        now: datetime | None = None,
    ) -> SubmissionOutcome:
        """Decide and persist one attendance submission.

        Raises:
            ValidationError: identity or display name missing.
            AddressUnresolvable: no client address available.
            DocumentStoreFailure: the JSON database could not be written.
        """
        request_id = secrets.token_hex(3)
        identity = require_non_empty(identity, "student_id")
        display_name = require_non_empty(display_name, "student_name")
        logger.info("[%s] Attendance submission for %s (%s)", request_id, identity, display_name)

        origin = classify(forwarded_for, peer_address)
        expected = self._registry.get(identity)
        decision = decide(origin.address, origin.is_private, expected)
        logger.info(
            "[%s] Client IP %s, expected %s, private=%s, proxy=%s -> %s (%s)",
            request_id, origin.address, expected or "(none)", origin.is_private, origin.is_proxied,
            decision.status.value, decision.reason.value,
        )

        with self._locks.hold(identity):
            record = AttendanceRecord(
                identity=identity,
                display_name=display_name,
                observed_address=origin.address,
                expected_address=expected,
                is_private=origin.is_private,
                is_proxied=origin.is_proxied,
                status=decision.status,
                reason=decision.reason,
                timestamp=now or now_utc(),
            )

            existing = self._guard.find_duplicate(identity, record)
            if existing is not None:
                logger.info("[%s] Duplicate present marking prevented for today", request_id)
                return SubmissionOutcome(
                    status=AttendanceStatus.PRESENT,
                    message=f"Already marked present today ({to_iso(existing.timestamp)}).",
                    record=record,
                    already_marked=True,
                    marked_at=existing.timestamp,
                )

            result = self._coordinator.persist(record, request_id=request_id)

        return SubmissionOutcome(
            status=record.status,
            message=_outcome_message(record),
            record=record,
            degraded=result.degraded,
        )

    def report(self) -> list[ReportRow]:
        """Every stored record in file order."""
        return self._coordinator.read_all()

    def describe_address(self, *, forwarded_for: Optional[str] = None, peer_address: Optional[str] = None) -> dict:
        return describe(forwarded_for, peer_address)


def _outcome_message(record: AttendanceRecord) -> str:
    if record.status == AttendanceStatus.PRESENT:
        return f"Successfully marked Present (IP matched: {record.observed_address})."
    return (
        f"Marked Absent (IP {record.observed_address} does not match "
        f"expected IP {record.expected_address or '(none)'})."
    )
