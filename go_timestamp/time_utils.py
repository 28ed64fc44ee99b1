"""
Shared datetime helpers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional


def ensure_utc(dt: datetime) -> datetime:
    """Return a timezone-aware UTC datetime."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp and normalize it to UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return ensure_utc(parsed)


def latest(dates: Iterable[datetime]) -> Optional[datetime]:
    """Return the latest of the given dates, or None if there are none."""
    normalized = [ensure_utc(dt) for dt in dates]
    if not normalized:
        return None
    return max(normalized)


def format_date(dt: datetime) -> str:
    """Render a datetime as ISO 8601 in UTC."""
    return ensure_utc(dt).isoformat()
