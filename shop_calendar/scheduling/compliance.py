"""
Business-hours compliance.

Two separate policies, used by different views:

1. Per event (month and day chips), minute precision. An event is outside
   hours when its start clock time is strictly before opening or strictly
   after closing. Starting exactly at open or at close is compliant. Events
   on a closed or unconfigured day are never flagged: closed-day styling
   replaces the flag.

2. Per hour cell (week and day grids), hour precision. An hour row is within
   business hours when open_hour <= hour < close_hour. Minutes of the
   configured times are ignored. Closed days have no business hours;
   unconfigured days use the default window.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from .business_hours import BusinessHoursTable, window_for_rule
from .models import BusinessHourRule, Event
from .timeparse import clock_of

logger = logging.getLogger(__name__)


def is_outside_hours(event: Event, rule: BusinessHourRule | None) -> bool:
    """Per-event outside-hours flag for the rule of the event's start weekday."""
    if rule is None or rule.is_closed:
        return False
    window = window_for_rule(rule)
    t = clock_of(event.start)
    return t < window.open_minutes or t > window.close_minutes


def is_hour_within_business_hours(hour: int, rule: BusinessHourRule | None) -> bool:
    """Per-hour-cell shading for the rule of the cell's weekday."""
    window = window_for_rule(rule)
    if window is None:
        return False
    return window.open_hour <= hour < window.close_hour


@dataclass(frozen=True)
class AnnotatedEvent:
    """An event with its compliance state for chip styling."""

    event: Event
    outside_hours: bool
    closed_day: bool


def annotate_event(event: Event, table: BusinessHoursTable) -> AnnotatedEvent:
    rule = table.rule_for(event.start)
    return AnnotatedEvent(
        event=event,
        outside_hours=is_outside_hours(event, rule),
        closed_day=rule is not None and rule.is_closed,
    )


def annotate(events: Iterable[Event], table: BusinessHoursTable) -> list[AnnotatedEvent]:
    """Annotate events in order."""
    annotated = [annotate_event(e, table) for e in events]
    flagged = sum(1 for a in annotated if a.outside_hours)
    if flagged:
        logger.debug("%d of %d events start outside business hours", flagged, len(annotated))
    return annotated


def business_hour_rows(
    table: BusinessHoursTable, day: date, hours: Iterable[int]
) -> dict[int, bool]:
    """Within-business-hours flag for each displayed hour of one day."""
    rule = table.rule_for(day)
    return {h: is_hour_within_business_hours(h, rule) for h in hours}
