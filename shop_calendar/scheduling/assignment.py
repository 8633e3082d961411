"""
Event-to-cell assignment for month, week and day views.

A date cell holds every event that occurs on that day. An hour cell holds
only the events that start in that hour; continuation of a long event into
later rows is drawn by the presentation layer.
"""

from collections.abc import Iterable
from datetime import date, datetime, time

from .models import Event


def occurs_on(event: Event, day: date) -> bool:
    """
    True if the event belongs in the date cell for `day`.

    Midnight of the day inside [start, end], or the day equal to the
    calendar date of either endpoint. The endpoint checks catch same-day
    events that start after midnight.
    """
    midnight = datetime.combine(day, time.min)
    if event.start <= midnight <= event.end:
        return True
    return event.start.date() == day or event.end.date() == day


def starts_in_hour(event: Event, day: date, hour: int) -> bool:
    """True if the event starts on `day` within clock hour `hour`."""
    return event.start.date() == day and event.start.hour == hour


def events_for_day(events: Iterable[Event], day: date) -> list[Event]:
    """Events in the date cell, input order preserved."""
    return [e for e in events if occurs_on(e, day)]


def events_for_hour(events: Iterable[Event], day: date, hour: int) -> list[Event]:
    """Events in the (day, hour) cell, input order preserved."""
    return [e for e in events if starts_in_hour(e, day, hour)]


def group_by_day(events: Iterable[Event], days: Iterable[date]) -> dict[date, list[Event]]:
    """Date cells for a whole view pass."""
    events = list(events)
    return {d: events_for_day(events, d) for d in days}


def group_by_hour(
    events: Iterable[Event], day: date, hours: Iterable[int]
) -> dict[int, list[Event]]:
    """Hour cells for one day column."""
    same_day = [e for e in events if e.start.date() == day]
    return {h: [e for e in same_day if e.start.hour == h] for h in hours}
