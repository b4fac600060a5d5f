from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .attendance.service import AttendanceService
from .core.constants import DEFAULT_DOCUMENT_FILE, DEFAULT_TABULAR_FILE
from .registry.service import ExpectedAddressRegistry
from .storage.coordinator import PersistenceCoordinator
from .storage.excel_store import ExcelAttendanceStore
from .storage.json_store import JsonDocumentStore
from .storage.locks import IdentityLocks


@dataclass(frozen=True)
class Container:
    tabular_store: ExcelAttendanceStore
    document_store: JsonDocumentStore

    coordinator: PersistenceCoordinator
    registry: ExpectedAddressRegistry
    attendance_service: AttendanceService

    admin_token: Optional[str] = None


def build_container(
    *,
    data_dir: Path | str,
    tabular_file: str = DEFAULT_TABULAR_FILE,
    document_file: str = DEFAULT_DOCUMENT_FILE,
    default_expected_address: Optional[str] = None,
    admin_token: Optional[str] = None,
) -> Container:
    data_dir = Path(data_dir)
    tabular_store = ExcelAttendanceStore(data_dir / tabular_file)
    document_store = JsonDocumentStore(data_dir / document_file)

    coordinator = PersistenceCoordinator(tabular_store, document_store)
    registry = ExpectedAddressRegistry(document_store, default_address=default_expected_address)
    attendance_service = AttendanceService(registry, coordinator, locks=IdentityLocks())

    return Container(
        tabular_store=tabular_store,
        document_store=document_store,
        coordinator=coordinator,
        registry=registry,
        attendance_service=attendance_service,
        admin_token=admin_token or None,
    )
