from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ExpectedAddressEntry:
    """Admin-configured expected address for one identity (last write wins)."""

    identity: str
    expected_address: str
    updated_at: Optional[datetime]
