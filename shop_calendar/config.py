"""
Centralized configuration for the shop calendar.

Deployment values come from environment variables (marked below). Calendar
data (weekly hours, view geometry, carry-over policy) comes from
config/calendar.yaml; any missing key falls back to the constants here.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from shop_calendar import paths
from shop_calendar.scheduling.business_hours import BusinessHoursTable
from shop_calendar.scheduling.carry_over import CarryOverPolicy
from shop_calendar.scheduling.models import coerce_bool

logger = logging.getLogger(__name__)

# ============================================================
# Logging (read when configure_logging() runs)
# ============================================================

ENV_LOG_LEVEL = "SHOP_CALENDAR_LOG_LEVEL"
ENV_LOG_JSON = "SHOP_CALENDAR_LOG_JSON"


def log_level() -> str:
    """Root log level name, default INFO."""
    return os.environ.get(ENV_LOG_LEVEL, "").strip() or "INFO"


def log_json() -> bool | None:
    """Force JSON (true) or human (false) log lines. None when unset."""
    raw = os.environ.get(ENV_LOG_JSON, "").strip()
    if not raw:
        return None
    return coerce_bool(raw, default=False)


# ============================================================
# Calendar defaults
# ============================================================

_DEFAULT_VISIBLE_START_HOUR = 6
_DEFAULT_VISIBLE_HOUR_COUNT = 16
_DEFAULT_PX_PER_HOUR = 60.0
_DEFAULT_MONTH_CAP = 3
_DEFAULT_WEEK_CAP = 4
_DEFAULT_TICK_INTERVAL_SECONDS = 60


@dataclass
class ViewSettings:
    """Geometry of the hour grids and chip caps."""

    visible_start_hour: int = _DEFAULT_VISIBLE_START_HOUR
    visible_hour_count: int = _DEFAULT_VISIBLE_HOUR_COUNT
    px_per_hour: float = _DEFAULT_PX_PER_HOUR
    month_cap: int | None = _DEFAULT_MONTH_CAP
    week_cap: int | None = _DEFAULT_WEEK_CAP


@dataclass
class CalendarConfig:
    """Everything a host needs to render the calendar."""

    business_hours: BusinessHoursTable = field(default_factory=BusinessHoursTable)
    view: ViewSettings = field(default_factory=ViewSettings)
    tick_interval_seconds: int = _DEFAULT_TICK_INTERVAL_SECONDS
    carry_over: CarryOverPolicy = field(default_factory=CarryOverPolicy)


def _read_yaml(config_path: Path) -> dict:
    """Load YAML config, return empty dict on failure."""
    if not config_path.exists():
        logger.warning("Calendar config not found at %s, using defaults", config_path)
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as exc:
        logger.error("Failed to load calendar config %s: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Calendar config %s is not a mapping, using defaults", config_path)
        return {}
    return data


def _int_setting(section: dict, key: str, default: int, minimum: int = 0) -> int:
    value = section.get(key, default)
    try:
        value = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r in calendar config, using %s", key, value, default)
        return default
    if value < minimum:
        logger.warning("%s=%s below %s in calendar config, using %s", key, value, minimum, default)
        return default
    return value


def _cap_setting(section: dict, key: str, default: int | None) -> int | None:
    if key in section and section[key] is None:
        return None
    return _int_setting(section, key, default, minimum=1)


def parse_calendar_config(data: dict) -> CalendarConfig:
    """Build a CalendarConfig from an already-loaded mapping."""
    view_section = data.get("view") or {}
    ticker_section = data.get("ticker") or {}

    try:
        px_per_hour = float(view_section.get("px_per_hour", _DEFAULT_PX_PER_HOUR))
    except (TypeError, ValueError):
        logger.warning("Invalid px_per_hour in calendar config, using %s", _DEFAULT_PX_PER_HOUR)
        px_per_hour = _DEFAULT_PX_PER_HOUR

    start_hour = _int_setting(view_section, "visible_start_hour", _DEFAULT_VISIBLE_START_HOUR)
    if start_hour > 23:
        logger.warning("visible_start_hour=%s out of range, using default", start_hour)
        start_hour = _DEFAULT_VISIBLE_START_HOUR

    view = ViewSettings(
        visible_start_hour=start_hour,
        visible_hour_count=_int_setting(
            view_section, "visible_hour_count", _DEFAULT_VISIBLE_HOUR_COUNT, minimum=1
        ),
        px_per_hour=px_per_hour,
        month_cap=_cap_setting(view_section, "month_cap", _DEFAULT_MONTH_CAP),
        week_cap=_cap_setting(view_section, "week_cap", _DEFAULT_WEEK_CAP),
    )

    return CalendarConfig(
        business_hours=BusinessHoursTable.from_rows(data.get("business_hours")),
        view=view,
        tick_interval_seconds=_int_setting(
            ticker_section, "interval_seconds", _DEFAULT_TICK_INTERVAL_SECONDS, minimum=1
        ),
        carry_over=CarryOverPolicy.from_config(data.get("carry_over")),
    )


def load_calendar_config(config_path: Path | None = None) -> CalendarConfig:
    """
    Load calendar configuration.

    Never raises: a missing or broken file yields the built-in defaults.
    """
    if config_path is None:
        config_path = paths.calendar_config_path()
    return parse_calendar_config(_read_yaml(Path(config_path)))
