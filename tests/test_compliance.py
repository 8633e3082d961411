"""
Tests for business-hours compliance: per-event flag and per-hour shading.

2024-06-10 is a Monday, 2024-06-09 a Sunday, 2024-06-14 a Friday.
"""

from datetime import date, datetime

import pytest

from shop_calendar.scheduling.business_hours import BusinessHoursTable
from shop_calendar.scheduling.compliance import (
    annotate,
    business_hour_rows,
    is_hour_within_business_hours,
    is_outside_hours,
)
from shop_calendar.scheduling.models import BusinessHourRule, Weekday


class TestOutsideHoursMonday:
    """Rule Monday 09:00-17:00, boundaries compliant."""

    @pytest.mark.parametrize(
        "hour,minute,expected",
        [
            (8, 30, True),
            (8, 59, True),
            (9, 0, False),
            (12, 0, False),
            (17, 0, False),
            (17, 1, True),
            (23, 59, True),
            (0, 0, True),
        ],
    )
    def test_boundaries(self, make_event, monday_rule, hour, minute, expected):
        e = make_event(datetime(2024, 6, 10, hour, minute))
        assert is_outside_hours(e, monday_rule) is expected

    def test_seconds_truncated(self, make_event, monday_rule):
        # 17:00:45 truncates to 17:00, still compliant
        e = make_event(datetime(2024, 6, 10, 17, 0, 45))
        assert is_outside_hours(e, monday_rule) is False

    def test_only_start_time_counts(self, make_event, monday_rule):
        e = make_event(datetime(2024, 6, 10, 16, 0), datetime(2024, 6, 10, 20, 0))
        assert is_outside_hours(e, monday_rule) is False


class TestOutsideHoursClosedOrMissing:
    def test_closed_day_never_flagged(self, make_event):
        rule = BusinessHourRule(Weekday.SUNDAY, "09:00", "17:00", is_closed=True)
        e = make_event(datetime(2024, 6, 9, 3, 0))
        assert is_outside_hours(e, rule) is False

    def test_no_rule_never_flagged(self, make_event):
        e = make_event(datetime(2024, 6, 14, 23, 0))
        assert is_outside_hours(e, None) is False

    def test_malformed_rule_uses_default_window(self, make_event):
        rule = BusinessHourRule(Weekday.MONDAY, "09:xx", "5pm")
        assert is_outside_hours(make_event(datetime(2024, 6, 10, 8, 0)), rule) is True
        assert is_outside_hours(make_event(datetime(2024, 6, 10, 16, 0)), rule) is False

    def test_int_weekday_with_malformed_times(self, make_event):
        rule = BusinessHourRule(day_of_week=1, open_time="9am", close_time="17:01")
        assert rule.day_of_week is Weekday.MONDAY
        assert is_outside_hours(make_event(datetime(2024, 6, 10, 8, 30)), rule) is True
        assert is_outside_hours(make_event(datetime(2024, 6, 10, 10, 0)), rule) is False

    def test_rule_with_seconds(self, make_event):
        rule = BusinessHourRule(Weekday.MONDAY, "09:00:00", "17:00:00")
        assert is_outside_hours(make_event(datetime(2024, 6, 10, 17, 0)), rule) is False
        assert is_outside_hours(make_event(datetime(2024, 6, 10, 17, 1)), rule) is True


class TestHourCells:
    """Hour-level shading: open_hour <= hour < close_hour."""

    def test_open_hours(self, monday_rule):
        within = [h for h in range(24) if is_hour_within_business_hours(h, monday_rule)]
        assert within == list(range(9, 17))

    def test_minutes_ignored(self):
        rule = BusinessHourRule(Weekday.FRIDAY, "08:30", "16:45")
        assert is_hour_within_business_hours(8, rule) is True
        assert is_hour_within_business_hours(16, rule) is True
        assert is_hour_within_business_hours(17, rule) is False

    def test_closed_day_no_hours(self):
        rule = BusinessHourRule(Weekday.SUNDAY, "09:00", "17:00", is_closed=True)
        assert not any(is_hour_within_business_hours(h, rule) for h in range(24))

    def test_missing_rule_default_window(self):
        assert is_hour_within_business_hours(9, None) is True
        assert is_hour_within_business_hours(17, None) is False

    def test_policies_differ_at_close(self, make_event, monday_rule):
        # 17:00 event is compliant, yet the 17:00 row is not shaded
        e = make_event(datetime(2024, 6, 10, 17, 0))
        assert is_outside_hours(e, monday_rule) is False
        assert is_hour_within_business_hours(17, monday_rule) is False

    def test_business_hour_rows(self, shop_table):
        rows = business_hour_rows(shop_table, date(2024, 6, 15), range(8, 14))  # Saturday
        assert rows == {8: False, 9: True, 10: True, 11: True, 12: True, 13: False}


class TestAnnotate:
    def test_flags_and_closed_day(self, make_event, shop_table):
        events = [
            make_event(datetime(2024, 6, 10, 7, 0)),  # Mon before 08:00
            make_event(datetime(2024, 6, 10, 10, 0)),  # Mon inside
            make_event(datetime(2024, 6, 9, 10, 0)),  # Sun closed
            make_event(datetime(2024, 6, 14, 6, 0)),  # Fri unconfigured
        ]
        annotated = annotate(events, shop_table)
        assert [a.outside_hours for a in annotated] == [True, False, False, False]
        assert [a.closed_day for a in annotated] == [False, False, True, False]
        assert [a.event for a in annotated] == events

    def test_empty(self):
        assert annotate([], BusinessHoursTable()) == []
