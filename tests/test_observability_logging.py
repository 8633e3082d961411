"""
Tests for log formatting, tick scopes and env-driven logging setup.
"""

import json
import logging
from datetime import datetime

import pytest

from shop_calendar.config import ENV_LOG_JSON, ENV_LOG_LEVEL, log_json, log_level
from shop_calendar.observability import (
    HumanFormatter,
    JSONFormatter,
    configure_logging,
    current_tick,
    tick_scope,
)

NOW = datetime(2024, 6, 10, 9, 1)


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("shop_calendar.test", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestJSONFormatter:
    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record("hello")))
        assert data["level"] == "INFO"
        assert data["logger"] == "shop_calendar.test"
        assert data["message"] == "hello"
        assert "tick" not in data

    def test_tick_and_extra(self):
        with tick_scope(7, NOW):
            data = json.loads(JSONFormatter().format(_record("hi", count=3)))
        assert data["tick"] == 7
        assert data["tick_now"] == "2024-06-10T09:01"
        assert data["count"] == 3


class TestHumanFormatter:
    def test_includes_tick(self):
        with tick_scope(42, NOW):
            line = HumanFormatter().format(_record("rendered"))
        assert "[tick 42 @ 09:01]" in line
        assert line.endswith("shop_calendar.test [tick 42 @ 09:01] rendered")

    def test_without_tick(self):
        assert HumanFormatter().format(_record("idle")).endswith("INFO shop_calendar.test idle")


class TestTickScope:
    def test_resets_after_block(self):
        with tick_scope(1, NOW) as info:
            assert current_tick() is info
            assert info.now == NOW
        assert current_tick() is None


class TestEnvSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)
        monkeypatch.delenv(ENV_LOG_JSON, raising=False)
        assert log_level() == "INFO"
        assert log_json() is None

    @pytest.mark.parametrize("raw,expected", [("1", True), ("true", True), ("no", False)])
    def test_json_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv(ENV_LOG_JSON, raw)
        assert log_json() is expected


class TestConfigure:
    def test_explicit_arguments(self, restore_root_logger):
        configure_logging("debug", json_format=True)
        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)

    def test_env_defaults(self, monkeypatch, restore_root_logger):
        monkeypatch.setenv(ENV_LOG_LEVEL, "WARNING")
        monkeypatch.setenv(ENV_LOG_JSON, "false")
        configure_logging()
        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, HumanFormatter)

    def test_env_json(self, monkeypatch, restore_root_logger):
        monkeypatch.setenv(ENV_LOG_JSON, "true")
        configure_logging()
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
