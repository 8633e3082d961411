"""
Parsing of "HH:MM" clock strings into minutes since midnight.

The schedule editor stores 24-hour zero-padded strings. Database time
columns may append seconds ("09:00:00"); seconds are ignored.
"""

import re
from datetime import datetime

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")

MINUTES_PER_DAY = 24 * 60


def parse_clock(value: str | None) -> int | None:
    """
    Parse "HH:MM" (or "HH:MM:SS") into minutes since midnight.

    Returns None for anything unparsable or out of range.
    """
    if value is None:
        return None
    m = _CLOCK_RE.match(str(value))
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        return None
    if m.group(3) is not None and int(m.group(3)) > 59:
        return None
    return hour * 60 + minute


def clock_of(dt: datetime) -> int:
    """Minutes since midnight of a timestamp, truncated to the minute."""
    return dt.hour * 60 + dt.minute


def format_clock(minutes: int) -> str:
    """Inverse of parse_clock for in-range values."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
