"""
Ordering of events inside a cell.

Two distinct policies:
- chips in month/week/day cells: by priority (high, medium, low), stable;
- day-detail and agenda lists: by start time, priority ignored.

A visible-item cap is applied only after sorting.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .models import Event

T = TypeVar("T")


def by_priority(events: Iterable[Event]) -> list[Event]:
    """Stable sort by priority rank; unknown priorities go last."""
    return sorted(events, key=lambda e: e.priority_rank)


def chronological(events: Iterable[Event]) -> list[Event]:
    """Stable sort by start time."""
    return sorted(events, key=lambda e: e.start)


@dataclass(frozen=True)
class CappedEvents(Generic[T]):
    """The items a cell shows plus how many were cut ("+N more")."""

    shown: list[T]
    overflow: int

    @property
    def total(self) -> int:
        return len(self.shown) + self.overflow


def cap_events(items: Sequence[T], limit: int | None) -> CappedEvents[T]:
    """Keep the first `limit` items of an already sorted sequence."""
    items = list(items)
    if limit is None or limit >= len(items):
        return CappedEvents(shown=items, overflow=0)
    limit = max(limit, 0)
    return CappedEvents(shown=items[:limit], overflow=len(items) - limit)
