"""Timestamp utilities."""

from datetime import datetime
from typing import Optional

import pytz


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(pytz.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(timestamp_str: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub timestamp, returning None if it is missing or unparseable."""
    if not timestamp_str:
        return None

    from dateutil.parser import parse
    try:
        timestamp = parse(timestamp_str)
    except (ValueError, OverflowError):
        return None

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=pytz.utc)
    return timestamp
