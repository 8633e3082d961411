"""
Calendar data model.

Events and business-hour rules are owned by the host application; the
scheduling engine only reads them. Everything here is immutable.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Any

logger = logging.getLogger(__name__)


class Priority(Enum):
    """Event severity, highest first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK: dict[str, int] = {
    Priority.HIGH.value: 0,
    Priority.MEDIUM.value: 1,
    Priority.LOW.value: 2,
}
UNKNOWN_PRIORITY_RANK = 3


class EventStatus(Enum):
    """Known job statuses. Any other text is carried through untouched."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Weekday(IntEnum):
    """Day of week as stored by the weekly schedule editor (0 = Sunday)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, d: date) -> "Weekday":
        """Weekday of a date or datetime (Python's weekday() is Monday-first)."""
        return cls((d.weekday() + 1) % 7)


def _plain_text(value: Any) -> str:
    """Lower-cased text of a string or enum member."""
    if isinstance(value, Enum):
        value = value.value
    return str(value if value is not None else "").strip().lower()


_TRUE_WORDS = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "n", "off", ""})


def coerce_bool(value: Any, default: bool = False) -> bool:
    """
    Read a flag from host rows or env text.

    "false"/"0"/"no" are False; unknown words fall back to `default`.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    return default


def _to_local_naive(value: Any) -> datetime:
    """Coerce an ISO string or datetime into a naive local wall-clock datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


@dataclass(frozen=True)
class Event:
    """A scheduled job as seen by the calendar."""

    id: str
    start: datetime
    end: datetime
    priority: str = Priority.MEDIUM.value
    status: str = EventStatus.SCHEDULED.value
    title: str = ""
    technician: str = ""
    customer: str = ""
    description: str = ""
    location: str = ""
    type: str = ""

    @property
    def priority_rank(self) -> int:
        return PRIORITY_RANK.get(_plain_text(self.priority), UNKNOWN_PRIORITY_RANK)

    @property
    def normalized_status(self) -> str:
        return _plain_text(self.status)

    @classmethod
    def from_dict(cls, row: dict) -> "Event":
        """
        Build an Event from a host row.

        Accepts `start`/`end` or `start_time`/`end_time`, as ISO-8601 strings
        or datetimes. A missing end collapses to the start.
        """
        start = _to_local_naive(row.get("start", row.get("start_time")))
        raw_end = row.get("end", row.get("end_time"))
        end = _to_local_naive(raw_end) if raw_end is not None else start

        return cls(
            id=str(row["id"]),
            start=start,
            end=end,
            priority=row.get("priority") or Priority.MEDIUM.value,
            status=row.get("status") or EventStatus.SCHEDULED.value,
            title=row.get("title") or "",
            technician=row.get("technician") or "",
            customer=row.get("customer") or "",
            description=row.get("description") or "",
            location=row.get("location") or "",
            type=row.get("type") or "",
        )


@dataclass(frozen=True)
class BusinessHourRule:
    """Opening hours for one weekday, as written by the schedule editor."""

    day_of_week: Weekday
    open_time: str = "09:00"
    close_time: str = "17:00"
    is_closed: bool = False

    def __post_init__(self):
        # Rules built from the 0=Sunday integers of the editor
        if not isinstance(self.day_of_week, Weekday):
            object.__setattr__(self, "day_of_week", Weekday(int(self.day_of_week)))
        if not isinstance(self.is_closed, bool):
            object.__setattr__(self, "is_closed", coerce_bool(self.is_closed))

    @classmethod
    def from_dict(cls, row: dict) -> "BusinessHourRule":
        return cls(
            day_of_week=Weekday(int(row["day_of_week"])),
            open_time=str(row.get("open_time") or "09:00"),
            close_time=str(row.get("close_time") or "17:00"),
            is_closed=coerce_bool(row.get("is_closed"), default=False),
        )

    def to_dict(self) -> dict:
        return {
            "day_of_week": int(self.day_of_week),
            "open_time": self.open_time,
            "close_time": self.close_time,
            "is_closed": self.is_closed,
        }
