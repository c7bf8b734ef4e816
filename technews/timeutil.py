"""
Timestamp parsing/formatting shared by the query layer and the normalizer.
"""
from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

UTC_PLUS_8 = timezone(timedelta(hours=8))


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse ISO-8601 or RFC 2822 text into an aware datetime; naive values are UTC."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except (ValueError, OverflowError):
        try:
            dt = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError, OverflowError):
            return None
    if dt is None:
        return None
    return as_utc(dt)


def as_utc(dt: datetime) -> Optional[datetime]:
    """Shift to UTC; dates whose offset pushes them outside the datetime range are unusable."""
    if not dt.tzinfo:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        return None


def from_struct_time(value: Any) -> Optional[datetime]:
    """feedparser's ``*_parsed`` fields are UTC struct_time tuples."""
    if not isinstance(value, (time.struct_time, tuple)) or len(value) < 6:
        return None
    try:
        return datetime(*value[:6], tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return None


def to_iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))
