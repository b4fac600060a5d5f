from __future__ import annotations

from datetime import datetime, timezone

from ..core.constants import DATE_FORMAT, TIME_FORMAT


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Serialize a timestamp as ISO-8601 in UTC with millisecond precision."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """Parse a stored ISO-8601 timestamp into an aware UTC datetime."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def split_timestamp(value: datetime) -> tuple[str, str]:
    """Split a timestamp into its UTC ("YYYY-MM-DD", "HH:MM:SS") parts."""
    value = value.astimezone(timezone.utc)
    return value.strftime(DATE_FORMAT), value.strftime(TIME_FORMAT)
