"""
Test configuration — ensures repo root is in sys.path + shared calendar fixtures.

This allows tests to import shop_calendar without installing the package.
All fixtures use fixed dates; no test depends on the wall clock.
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import shop_calendar.*
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from shop_calendar.scheduling.business_hours import BusinessHoursTable  # noqa: E402
from shop_calendar.scheduling.models import BusinessHourRule, Event, Weekday  # noqa: E402


@pytest.fixture
def make_event():
    """Factory for events with sensible defaults."""
    counter = {"n": 0}

    def _make(start: datetime, end: datetime | None = None, **kwargs) -> Event:
        counter["n"] += 1
        kwargs.setdefault("id", f"evt-{counter['n']}")
        return Event(start=start, end=end or start, **kwargs)

    return _make


@pytest.fixture
def monday_rule():
    """Monday 09:00-17:00."""
    return BusinessHourRule(
        day_of_week=Weekday.MONDAY, open_time="09:00", close_time="17:00", is_closed=False
    )


@pytest.fixture
def shop_table():
    """Sunday closed, weekdays 08:00-17:00, Saturday 09:00-13:00."""
    rules = [BusinessHourRule(Weekday.SUNDAY, "09:00", "17:00", is_closed=True)]
    for day in (Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY):
        rules.append(BusinessHourRule(day, "08:00", "17:00"))
    rules.append(BusinessHourRule(Weekday.SATURDAY, "09:00", "13:00"))
    # Friday left unconfigured on purpose
    return BusinessHoursTable(rules)
