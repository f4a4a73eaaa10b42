from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Current UTC time as a naive datetime, whole seconds (matches DATETIME columns).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 string into a naive UTC datetime.

    Offsets (including a trailing ``Z``) are converted to UTC; values without
    an offset are taken as UTC already.
    """
    v = value.strip()
    if v.endswith(("Z", "z")):
        v = v[:-1] + "+00:00"
    parsed = datetime.fromisoformat(v)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed.replace(microsecond=0)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
