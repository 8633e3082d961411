"""
Which "now" evaluation a log line was written under.

NowTicker opens a tick scope around each callback; formatters read it so
every line logged while recomputing the calendar carries the tick number
and the timestamp being rendered.
"""

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TickInfo:
    number: int
    now: datetime


_current_tick: contextvars.ContextVar[TickInfo | None] = contextvars.ContextVar(
    "shop_calendar_tick", default=None
)


def current_tick() -> TickInfo | None:
    return _current_tick.get()


@contextmanager
def tick_scope(number: int, now: datetime) -> Iterator[TickInfo]:
    """Mark log lines inside the block as belonging to tick `number` at `now`."""
    info = TickInfo(number=number, now=now)
    token = _current_tick.set(info)
    try:
        yield info
    finally:
        _current_tick.reset(token)
