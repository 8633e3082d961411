"""
Calendar view models for the month, week and day screens.

Composes assignment, ordering, compliance, carry-over and the time
indicator into per-cell data the presentation layer draws as-is. Weeks start
on Sunday, matching the weekday numbering of the schedule editor.
"""

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from . import assignment, carry_over, compliance, ordering, time_indicator
from .business_hours import BusinessHoursTable
from .carry_over import CarryOverPolicy
from .compliance import AnnotatedEvent
from .models import Event
from .ordering import CappedEvents
from .time_indicator import TimeIndicatorState

logger = logging.getLogger(__name__)


class ViewMode(Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


# =============================================================================
# DATE RANGES
# =============================================================================


def start_of_week(d: date) -> date:
    """Sunday on or before d."""
    return d - timedelta(days=(d.weekday() + 1) % 7)


def week_days(anchor: date) -> list[date]:
    """The Sunday-first week containing anchor."""
    first = start_of_week(anchor)
    return [first + timedelta(days=i) for i in range(7)]


def month_grid(anchor: date) -> list[list[date]]:
    """Sunday-first weeks covering anchor's month, padded with adjacent days."""
    first = anchor.replace(day=1)
    last = anchor.replace(day=calendar.monthrange(anchor.year, anchor.month)[1])
    current = start_of_week(first)
    grid_end = start_of_week(last) + timedelta(days=6)

    weeks: list[list[date]] = []
    while current <= grid_end:
        weeks.append([current + timedelta(days=i) for i in range(7)])
        current += timedelta(days=7)
    return weeks


def add_months(d: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def navigate(anchor: date, mode: ViewMode, step: int = 1) -> date:
    """Previous (step < 0) or next (step > 0) page of the view."""
    if mode is ViewMode.DAY:
        return anchor + timedelta(days=step)
    if mode is ViewMode.WEEK:
        return anchor + timedelta(weeks=step)
    return add_months(anchor, step)


def range_label(anchor: date, mode: ViewMode) -> str:
    """Header text for the visible range."""
    if mode is ViewMode.DAY:
        return f"{anchor:%A}, {anchor:%B} {anchor.day}, {anchor.year}"
    if mode is ViewMode.WEEK:
        first = start_of_week(anchor)
        last = first + timedelta(days=6)
        if first.month == last.month:
            return f"{first:%b} {first.day} - {last.day}, {last.year}"
        return f"{first:%b} {first.day} - {last:%b} {last.day}, {last.year}"
    return f"{anchor:%B} {anchor.year}"


# =============================================================================
# VIEW MODELS
# =============================================================================


@dataclass(frozen=True)
class DayCell:
    """One date cell: header state plus priority-sorted, capped chips."""

    date: date
    in_current_month: bool
    is_today: bool
    is_business_day: bool
    events: CappedEvents[AnnotatedEvent]


@dataclass(frozen=True)
class HourCell:
    """One (date, hour) cell of an hour grid."""

    date: date
    hour: int
    within_business_hours: bool
    events: list[AnnotatedEvent]


@dataclass(frozen=True)
class DayColumn:
    header: DayCell
    hours: list[HourCell]


@dataclass(frozen=True)
class MonthView:
    anchor: date
    label: str
    weeks: list[list[DayCell]]


@dataclass(frozen=True)
class GridView:
    """Week or day hour grid."""

    anchor: date
    label: str
    columns: list[DayColumn]
    hours: list[int]
    now_marker: TimeIndicatorState | None


@dataclass(frozen=True)
class DayDetail:
    """Side panel for one day: agenda in start order, overdue jobs for today."""

    date: date
    is_business_day: bool
    events: list[AnnotatedEvent]
    carry_over: list[Event] = field(default_factory=list)


# =============================================================================
# RENDERER
# =============================================================================


class CalendarViewRenderer:
    """
    Builds view models from a flat event list.

    Holds only configuration; every method takes the events and the current
    date/time explicitly.
    """

    def __init__(
        self,
        business_hours: BusinessHoursTable | None = None,
        visible_start_hour: int = 6,
        visible_hour_count: int = 16,
        px_per_hour: float = 60.0,
        month_cap: int | None = 3,
        week_cap: int | None = 4,
        carry_over_policy: CarryOverPolicy | None = None,
    ):
        self.business_hours = business_hours or BusinessHoursTable()
        self.visible_start_hour = visible_start_hour
        self.visible_hour_count = visible_hour_count
        self.px_per_hour = px_per_hour
        self.month_cap = month_cap
        self.week_cap = week_cap
        self.carry_over_policy = carry_over_policy or CarryOverPolicy()

    @classmethod
    def from_config(cls, config) -> "CalendarViewRenderer":
        """Build from a shop_calendar.config.CalendarConfig."""
        return cls(
            business_hours=config.business_hours,
            visible_start_hour=config.view.visible_start_hour,
            visible_hour_count=config.view.visible_hour_count,
            px_per_hour=config.view.px_per_hour,
            month_cap=config.view.month_cap,
            week_cap=config.view.week_cap,
            carry_over_policy=config.carry_over,
        )

    @property
    def hours(self) -> list[int]:
        end = min(self.visible_start_hour + self.visible_hour_count, 24)
        return list(range(self.visible_start_hour, end))

    # -------------------------------------------------------------------------
    # Cells
    # -------------------------------------------------------------------------

    def day_cell(
        self,
        events: Iterable[Event],
        day: date,
        today: date,
        cap: int | None,
        current_month: tuple[int, int] | None = None,
    ) -> DayCell:
        in_day = ordering.by_priority(assignment.events_for_day(events, day))
        annotated = compliance.annotate(in_day, self.business_hours)
        return DayCell(
            date=day,
            in_current_month=current_month is None or (day.year, day.month) == current_month,
            is_today=day == today,
            is_business_day=self.business_hours.is_business_day(day),
            events=ordering.cap_events(annotated, cap),
        )

    def hour_cells(self, events: Iterable[Event], day: date) -> list[HourCell]:
        hours = self.hours
        by_hour = assignment.group_by_hour(events, day, hours)
        shading = compliance.business_hour_rows(self.business_hours, day, hours)
        return [
            HourCell(
                date=day,
                hour=h,
                within_business_hours=shading[h],
                events=compliance.annotate(ordering.by_priority(by_hour[h]), self.business_hours),
            )
            for h in hours
        ]

    def now_marker(self, now: datetime) -> TimeIndicatorState:
        return time_indicator.position(
            now, self.visible_start_hour, self.visible_hour_count, self.px_per_hour
        )

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def month_view(self, events: Iterable[Event], anchor: date, today: date) -> MonthView:
        events = list(events)
        current = (anchor.year, anchor.month)
        weeks = [
            [self.day_cell(events, d, today, self.month_cap, current) for d in week]
            for week in month_grid(anchor)
        ]
        logger.debug("Month view %s: %d events, %d weeks", anchor, len(events), len(weeks))
        return MonthView(anchor=anchor, label=range_label(anchor, ViewMode.MONTH), weeks=weeks)

    def _grid(
        self, events: Iterable[Event], days: list[date], anchor: date, now: datetime, mode: ViewMode
    ) -> GridView:
        events = list(events)
        today = now.date()
        columns = [
            DayColumn(
                header=self.day_cell(events, d, today, self.week_cap),
                hours=self.hour_cells(events, d),
            )
            for d in days
        ]
        marker = self.now_marker(now) if today in days else None
        return GridView(
            anchor=anchor,
            label=range_label(anchor, mode),
            columns=columns,
            hours=self.hours,
            now_marker=marker,
        )

    def week_view(self, events: Iterable[Event], anchor: date, now: datetime) -> GridView:
        return self._grid(events, week_days(anchor), anchor, now, ViewMode.WEEK)

    def day_view(self, events: Iterable[Event], anchor: date, now: datetime) -> GridView:
        return self._grid(events, [anchor], anchor, now, ViewMode.DAY)

    def day_detail(self, events: Iterable[Event], day: date, today: date) -> DayDetail:
        events = list(events)
        agenda = ordering.chronological(assignment.events_for_day(events, day))
        overdue = (
            carry_over.resolve(events, today, self.carry_over_policy) if day == today else []
        )
        return DayDetail(
            date=day,
            is_business_day=self.business_hours.is_business_day(day),
            events=compliance.annotate(agenda, self.business_hours),
            carry_over=overdue,
        )
