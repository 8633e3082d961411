"""
Carry-over — past, unfinished jobs shown as overdue on today's view.

Membership is a pure function of an event's start date and status and the
caller's `today`; nothing is persisted. Re-invoke with a new `today` after a
day boundary and the result follows.

Only `completed` is excluded by default, so a cancelled job in the past still
carries over. That matches what the dashboard has always shown; the
`excluding_cancelled` policy exists for shops that want otherwise.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from .models import Event, EventStatus, coerce_bool
from .ordering import chronological

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CarryOverPolicy:
    """Statuses that stop a past event from carrying over."""

    excluded_statuses: frozenset[str] = field(
        default_factory=lambda: frozenset({EventStatus.COMPLETED.value})
    )

    @classmethod
    def excluding_cancelled(cls) -> "CarryOverPolicy":
        return cls(
            excluded_statuses=frozenset(
                {EventStatus.COMPLETED.value, EventStatus.CANCELLED.value}
            )
        )

    @classmethod
    def from_config(cls, settings: dict | None) -> "CarryOverPolicy":
        """Build from the `carry_over` section of calendar.yaml."""
        settings = settings or {}
        if coerce_bool(settings.get("exclude_cancelled"), default=False):
            return cls.excluding_cancelled()
        return cls()

    def excludes(self, status: str) -> bool:
        return status in self.excluded_statuses


DEFAULT_POLICY = CarryOverPolicy()


def _as_date(today: date | datetime) -> date:
    if isinstance(today, datetime):
        return today.date()
    return today


def is_carry_over(
    event: Event, today: date | datetime, policy: CarryOverPolicy = DEFAULT_POLICY
) -> bool:
    """True if the event started before today and is not finished."""
    return event.start.date() < _as_date(today) and not policy.excludes(event.normalized_status)


def resolve(
    events: Iterable[Event],
    today: date | datetime,
    policy: CarryOverPolicy = DEFAULT_POLICY,
) -> list[Event]:
    """Carry-over events, oldest first."""
    today = _as_date(today)
    carried = chronological(e for e in events if is_carry_over(e, today, policy))
    logger.debug("%d events carry over into %s", len(carried), today.isoformat())
    return carried


class CarryOverResolver:
    """Resolver bound to a policy, for hosts that configure it once."""

    def __init__(self, policy: CarryOverPolicy | None = None):
        self.policy = policy or DEFAULT_POLICY

    def resolve(self, events: Iterable[Event], today: date | datetime) -> list[Event]:
        return resolve(events, today, self.policy)

    def count(self, events: Iterable[Event], today: date | datetime) -> int:
        return sum(1 for e in events if is_carry_over(e, today, self.policy))
