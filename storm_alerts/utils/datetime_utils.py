"""Utility functions for working with dates and times."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

__all__ = [
    "get_current_timestamp",
    "parse_timestamp",
]


def get_current_timestamp() -> datetime:
    """Return the current UTC datetime with micro-second precision.

    This object can be stored directly in MongoDB where it will be written as
    a BSON Date.
    """
    return datetime.now(tz=timezone.utc)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an NWS ISO-8601 timestamp into an aware datetime.

    Returns ``None`` for empty or unparseable values. Naive timestamps are
    assumed to be UTC.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
