"""
Observability: log formatting tagged with the current "now" tick.

Usage:
    from shop_calendar.observability import configure_logging

    configure_logging()  # level and format from SHOP_CALENDAR_LOG_* env vars
"""

from .context import TickInfo, current_tick, tick_scope
from .logging import HumanFormatter, JSONFormatter, configure_logging

__all__ = [
    "HumanFormatter",
    "JSONFormatter",
    "TickInfo",
    "configure_logging",
    "current_tick",
    "tick_scope",
]
