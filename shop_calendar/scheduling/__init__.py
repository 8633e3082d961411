"""
Scheduling Module

Pure calendar logic over host-owned events and weekly business hours:

- assignment: which events go in which day or (day, hour) cell
- ordering: priority order for chips, start order for agendas, "+N more" caps
- compliance: outside-hours flag per event, business-hours shading per hour
- carry_over: past unfinished jobs surfaced on today
- time_indicator: position of the live "now" marker
- views: month/week/day view models composed from the above
- ticker: periodic "now" refresh for the host

Invariants:
- No function mutates its inputs or reads the clock (except NowTicker)
- An unconfigured weekday is open 09:00-17:00
- Closed days are never flagged outside hours
"""

from .assignment import events_for_day, events_for_hour, occurs_on, starts_in_hour
from .business_hours import (
    BusinessHoursError,
    BusinessHoursTable,
    HoursWindow,
    is_business_day,
    validate_rules,
)
from .carry_over import CarryOverPolicy, CarryOverResolver
from .compliance import AnnotatedEvent, annotate, is_hour_within_business_hours, is_outside_hours
from .models import BusinessHourRule, Event, EventStatus, Priority, Weekday
from .ordering import CappedEvents, by_priority, cap_events, chronological
from .ticker import NowTicker
from .time_indicator import TimeIndicatorState, position
from .views import CalendarViewRenderer, ViewMode, month_grid, navigate, range_label, week_days

__all__ = [
    "AnnotatedEvent",
    "BusinessHourRule",
    "BusinessHoursError",
    "BusinessHoursTable",
    "CalendarViewRenderer",
    "CappedEvents",
    "CarryOverPolicy",
    "CarryOverResolver",
    "Event",
    "EventStatus",
    "HoursWindow",
    "NowTicker",
    "Priority",
    "TimeIndicatorState",
    "ViewMode",
    "Weekday",
    "annotate",
    "by_priority",
    "cap_events",
    "chronological",
    "events_for_day",
    "events_for_hour",
    "is_business_day",
    "is_hour_within_business_hours",
    "is_outside_hours",
    "month_grid",
    "navigate",
    "occurs_on",
    "position",
    "range_label",
    "starts_in_hour",
    "validate_rules",
    "week_days",
]
