from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..storage.repository import DocumentStore
from .model import ExpectedAddressEntry


class ExpectedAddressRegistry:
    """Per-identity expected address with a process-wide default.

    Addresses are not validated beyond being non-empty.
    """

    def __init__(self, documents: DocumentStore, *, default_address: Optional[str] = None):
        self._documents = documents
        self._default = (default_address or "").strip() or None

    @property
    def default_address(self) -> Optional[str]:
        return self._default

    def get(self, identity: str) -> Optional[str]:
        return self._documents.get_expected(identity) or self._default

    def get_entry(self, identity: str) -> Optional[ExpectedAddressEntry]:
        """The configured entry only, ignoring the default."""
        return self._documents.get_entry(identity)

    def set(self, identity: str, address: str, *, now: datetime | None = None) -> ExpectedAddressEntry:
        identity = require_non_empty(identity, "student_id")
        address = require_non_empty(address, "expected_ip")
        updated_at = now or now_utc()
        self._documents.set_expected(identity, address, updated_at=updated_at)
        return ExpectedAddressEntry(identity=identity, expected_address=address, updated_at=updated_at)
