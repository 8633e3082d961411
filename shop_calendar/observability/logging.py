"""
Log formatting for hosts embedding the calendar engine.

Both formatters append the current tick (number and rendered "now") when a
line is written from inside NowTicker. configure_logging() takes its
defaults from SHOP_CALENDAR_LOG_LEVEL / SHOP_CALENDAR_LOG_JSON.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from .context import current_tick

# Attributes every LogRecord has; anything else came in through `extra=`
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


def _tick_fields() -> dict[str, Any]:
    tick = current_tick()
    if tick is None:
        return {}
    return {"tick": tick.number, "tick_now": tick.now.isoformat(timespec="minutes")}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line:

        {"ts": "2024-06-10T09:01:00.123+00:00", "level": "DEBUG",
         "logger": "shop_calendar.scheduling.carry_over",
         "message": "2 events carry over into 2024-06-10",
         "tick": 42, "tick_now": "2024-06-10T09:01"}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_tick_fields())
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class HumanFormatter(logging.Formatter):
    """`09:01:00 DEBUG shop_calendar.scheduling.views [tick 42 @ 09:01] message`"""

    def format(self, record: logging.LogRecord) -> str:
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        tick = current_tick()
        where = f" [tick {tick.number} @ {tick.now:%H:%M}]" if tick else ""
        line = f"{clock} {record.levelname} {record.name}{where} {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str | None = None, json_format: bool | None = None) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: Log level name. Defaults to SHOP_CALENDAR_LOG_LEVEL.
        json_format: JSON lines when True. Defaults to SHOP_CALENDAR_LOG_JSON,
            and when that is unset, JSON whenever stderr is not a terminal.
    """
    from shop_calendar import config

    if level is None:
        level = config.log_level()
    if json_format is None:
        json_format = config.log_json()
    if json_format is None:
        json_format = not sys.stderr.isatty()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    root_logger.addHandler(handler)
