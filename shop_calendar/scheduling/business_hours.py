"""
Business Hours — weekly operating-hours table and business-day predicate.

The table is a total lookup over the seven weekdays. A weekday without a
configured rule is open with the default 09:00-17:00 window, so a shop that
has not filled in its schedule yet never blocks scheduling.

Render paths never raise here: malformed rows are skipped and malformed
times fall back to the default window, both with a warning. Strict checking
for the schedule editor lives in validate_rules().
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from functools import lru_cache

from .models import BusinessHourRule, Weekday, coerce_bool
from .timeparse import format_clock, parse_clock

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_OPEN_TIME = "09:00"
DEFAULT_CLOSE_TIME = "17:00"


class BusinessHoursError(Exception):
    """Raised when weekly schedule rows fail strict validation."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


@dataclass(frozen=True)
class HoursWindow:
    """An open window within one day, in minutes since midnight."""

    open_minutes: int
    close_minutes: int

    @property
    def open_hour(self) -> int:
        return self.open_minutes // 60

    @property
    def close_hour(self) -> int:
        return self.close_minutes // 60

    def __str__(self) -> str:
        return f"{format_clock(self.open_minutes)}-{format_clock(self.close_minutes)}"


DEFAULT_WINDOW = HoursWindow(
    open_minutes=parse_clock(DEFAULT_OPEN_TIME),
    close_minutes=parse_clock(DEFAULT_CLOSE_TIME),
)


@lru_cache(maxsize=256)
def window_for_rule(rule: BusinessHourRule | None) -> HoursWindow | None:
    """
    Open window for a rule.

    None rule -> default window. Closed rule -> None. Unparsable times or an
    empty window -> default window.
    """
    if rule is None:
        return DEFAULT_WINDOW
    if rule.is_closed:
        return None

    open_m = parse_clock(rule.open_time)
    close_m = parse_clock(rule.close_time)
    if open_m is None or close_m is None:
        logger.warning(
            "Unparsable business hours for %s (%r-%r), using default %s",
            rule.day_of_week.name,
            rule.open_time,
            rule.close_time,
            DEFAULT_WINDOW,
        )
        return DEFAULT_WINDOW
    if open_m >= close_m:
        logger.warning(
            "Business hours for %s open at or after close (%s-%s), using default %s",
            rule.day_of_week.name,
            rule.open_time,
            rule.close_time,
            DEFAULT_WINDOW,
        )
        return DEFAULT_WINDOW
    return HoursWindow(open_minutes=open_m, close_minutes=close_m)


def coerce_weekday(day: Weekday | int | date) -> Weekday:
    """Accept a Weekday, a 0=Sunday integer, or a date."""
    if isinstance(day, date):
        return Weekday.of(day)
    return Weekday(int(day))


# =============================================================================
# TABLE
# =============================================================================


class BusinessHoursTable:
    """
    Weekly schedule lookup: weekday -> open/close/closed.

    Built from BusinessHourRule objects or raw editor rows. At most one rule
    per weekday; when duplicates arrive the later one wins.
    """

    def __init__(self, rules: Iterable[BusinessHourRule] = ()):
        self._rules: dict[Weekday, BusinessHourRule] = {}
        for rule in rules:
            if rule.day_of_week in self._rules:
                logger.warning(
                    "Duplicate business hours rule for %s, keeping the later one",
                    rule.day_of_week.name,
                )
            self._rules[rule.day_of_week] = rule

    @classmethod
    def from_rows(cls, rows: Iterable[dict] | None) -> "BusinessHoursTable":
        """Build from editor rows, skipping rows that cannot be read."""
        rules = []
        for row in rows or []:
            try:
                rules.append(BusinessHourRule.from_dict(row))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping unreadable business hours row %r: %s", row, exc)
        return cls(rules)

    def __len__(self) -> int:
        return len(self._rules)

    def rules(self) -> list[BusinessHourRule]:
        """Configured rules in weekday order."""
        return [self._rules[d] for d in sorted(self._rules)]

    # -------------------------------------------------------------------------
    # Core queries
    # -------------------------------------------------------------------------

    def rule_for(self, day: Weekday | int | date) -> BusinessHourRule | None:
        """Configured rule for a weekday, or None when unconfigured."""
        return self._rules.get(coerce_weekday(day))

    def window_for(self, day: Weekday | int | date) -> HoursWindow | None:
        """Open window for a weekday; None when the day is closed."""
        return window_for_rule(self.rule_for(day))

    def is_business_day(self, day: Weekday | int | date) -> bool:
        """True unless a rule marks the weekday closed. Unconfigured days are open."""
        rule = self.rule_for(day)
        if rule is None:
            return True
        return not rule.is_closed

    def is_closed_day(self, day: Weekday | int | date) -> bool:
        return not self.is_business_day(day)


def is_business_day(table: BusinessHoursTable, day: Weekday | int | date) -> bool:
    """Business-day predicate over a table."""
    return table.is_business_day(day)


# =============================================================================
# STRICT VALIDATION (schedule editor)
# =============================================================================


def validate_rules(rows: Iterable[dict]) -> list[BusinessHourRule]:
    """
    Validate editor rows and return them as rules.

    Raises BusinessHoursError listing every problem found.
    """
    problems: list[str] = []
    rules: list[BusinessHourRule] = []
    seen: set[int] = set()

    for i, row in enumerate(rows):
        raw_day = row.get("day_of_week")
        try:
            day = Weekday(int(raw_day))
        except (TypeError, ValueError):
            problems.append(f"row {i}: day_of_week {raw_day!r} is not 0-6")
            continue

        if day in seen:
            problems.append(f"row {i}: duplicate rule for {day.name}")
        seen.add(day)

        is_closed = coerce_bool(row.get("is_closed"), default=False)
        open_time = row.get("open_time")
        close_time = row.get("close_time")

        if not is_closed:
            open_m = parse_clock(open_time)
            close_m = parse_clock(close_time)
            if open_m is None:
                problems.append(f"row {i}: open_time {open_time!r} is not HH:MM")
            if close_m is None:
                problems.append(f"row {i}: close_time {close_time!r} is not HH:MM")
            if open_m is not None and close_m is not None and open_m >= close_m:
                problems.append(f"row {i}: {day.name} opens at or after it closes")

        rules.append(
            BusinessHourRule(
                day_of_week=day,
                open_time=str(open_time or DEFAULT_OPEN_TIME),
                close_time=str(close_time or DEFAULT_CLOSE_TIME),
                is_closed=is_closed,
            )
        )

    if problems:
        raise BusinessHoursError(problems)
    return rules
