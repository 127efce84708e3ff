"""
Timestamp helpers

RFC 3339 parsing that degrades to None (the zero timestamp) instead of raising.
"""

from __future__ import annotations
from datetime import datetime, UTC
from typing import Any, Optional


def parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    # RFC 3339 requires an offset
    if parsed.tzinfo is None:
        return None
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat().replace("+00:00", "Z")
