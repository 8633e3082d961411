"""
Live "now" marker position inside an hour grid.

The marker pins to the top edge before the visible range and to the bottom
edge at or after its end instead of disappearing. The grid header height is
added by the presentation layer.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TimeIndicatorState:
    """Marker position for one tick."""

    offset_fraction: float
    pixel_offset: float

    @property
    def at_top_edge(self) -> bool:
        return self.offset_fraction <= 0.0

    @property
    def at_bottom_edge(self) -> bool:
        return self.offset_fraction >= 1.0


def offset_fraction(now: datetime, visible_start_hour: int, visible_hour_count: int) -> float:
    """Position of `now` in the visible window, clamped to [0, 1]."""
    if visible_hour_count <= 0:
        return 0.0
    hours_in = (now.hour - visible_start_hour) + now.minute / 60
    return min(max(hours_in / visible_hour_count, 0.0), 1.0)


def position(
    now: datetime,
    visible_start_hour: int,
    visible_hour_count: int,
    px_per_hour: float,
) -> TimeIndicatorState:
    """Marker state for `now`; pixel offset never exceeds count * px_per_hour."""
    fraction = offset_fraction(now, visible_start_hour, visible_hour_count)
    return TimeIndicatorState(
        offset_fraction=fraction,
        pixel_offset=fraction * max(visible_hour_count, 0) * px_per_hour,
    )
