from __future__ import annotations

import logging
from dataclasses import dataclass

from ..attendance.model import AttendanceRecord, ReportRow
from ..core.exceptions import TabularStoreReadFailure, TabularStoreWriteFailure
from .repository import DocumentStore, TabularStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistResult:
    record: AttendanceRecord
    degraded: bool = False


class PersistenceCoordinator:
    """Owns write ordering across the spreadsheet and the JSON document.

    The spreadsheet is written first and may fail without consequence; the
    document append always follows and its failure propagates.
    """

    def __init__(self, tabular: TabularStore, documents: DocumentStore):
        self._tabular = tabular
        self._documents = documents

    def persist(self, record: AttendanceRecord, *, request_id: str = "-") -> PersistResult:
        degraded = False
        try:
            self._tabular.append(record)
            logger.info("[%s] Attendance saved to spreadsheet", request_id)
        except TabularStoreWriteFailure:
            logger.exception("[%s] Spreadsheet write failed, continuing with the JSON database only", request_id)
            degraded = True

        # DocumentStoreFailure is the one store error that fails the submission.
        self._documents.append(record)
        logger.info("[%s] Attendance saved to JSON database", request_id)
        return PersistResult(record=record, degraded=degraded)

    def read_all(self) -> list[ReportRow]:
        try:
            return list(self._tabular.read_all())
        except TabularStoreReadFailure as exc:
            logger.warning("Could not read spreadsheet, using JSON database: %s", exc)
            return [ReportRow.from_record(r) for r in self._documents.all_records()]

    def history_for(self, identity: str) -> list[AttendanceRecord]:
        return list(self._documents.all_for_identity(identity))
