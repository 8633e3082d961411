# Shop Calendar - scheduling and business-hours compliance engine
"""
Exports for host applications.
"""

from .config import CalendarConfig, load_calendar_config
from .scheduling import (
    BusinessHourRule,
    BusinessHoursTable,
    CalendarViewRenderer,
    CarryOverPolicy,
    CarryOverResolver,
    Event,
    NowTicker,
    Weekday,
)

__all__ = [
    "BusinessHourRule",
    "BusinessHoursTable",
    "CalendarConfig",
    "CalendarViewRenderer",
    "CarryOverPolicy",
    "CarryOverResolver",
    "Event",
    "NowTicker",
    "Weekday",
    "load_calendar_config",
]
