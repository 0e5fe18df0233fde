"""Tests for logging_config.py module."""

import logging

import colorlog
import pytest

from twitch_irc.logging_config import (
    ErrorAggregator,
    LoggerConfigurator,
    error_aggregator,
    log_structured_error,
)
from twitch_irc.logs.logger import logger as event_logger


class TestColoredFormatter:
    """Tests for the colorlog formatter built by the configurator."""

    @pytest.fixture
    def formatter(self):
        return LoggerConfigurator().build_formatter()

    def test_formatter_type(self, formatter):
        assert isinstance(formatter, colorlog.ColoredFormatter)

    def test_error_color(self, formatter):
        record = logging.LogRecord(
            name="test", level=logging.ERROR, pathname="", lineno=0, msg="test", args=(), exc_info=None
        )
        formatted = formatter.format(record)
        assert "\033[31m" in formatted  # Red color code
        assert "ERROR" in formatted
        assert "test" in formatted


class TestLoggerConfigurator:
    """Tests for LoggerConfigurator env parsing and handler setup."""

    @pytest.fixture
    def configurator(self):
        return LoggerConfigurator({"final_summary": False})

    @pytest.fixture(autouse=True)
    def _restore_event_logger(self):
        level = event_logger.logger.level
        yield
        event_logger.set_level(level)

    def test_debug_env_true(self, configurator, monkeypatch, root_level):
        monkeypatch.setenv("DEBUG", "true")
        assert configurator.configure() == logging.DEBUG
        assert root_level.level == logging.DEBUG
        assert event_logger.logger.level == logging.DEBUG

    def test_debug_env_false(self, configurator, monkeypatch, root_level):
        monkeypatch.setenv("DEBUG", "false")
        configurator.configure()
        assert root_level.level == logging.INFO
        assert event_logger.logger.level == logging.INFO

    def test_handler_formatter(self, configurator, root_level):
        configurator.configure()
        assert len(root_level.handlers) == 1
        assert isinstance(root_level.handlers[0].formatter, colorlog.ColoredFormatter)

    def test_final_summary_registers_exit_hook(self, monkeypatch, root_level):
        registered = []
        monkeypatch.setattr("twitch_irc.logging_config.atexit.register", registered.append)
        LoggerConfigurator().configure()
        assert registered == [LoggerConfigurator.log_error_summary]


class TestErrorAggregation:
    def test_log_structured_error_records_and_logs(self, caplog):
        caplog.set_level(logging.ERROR)
        log_structured_error(
            "parsing", "bad value", exception=ValueError("x"), context={"command": "PRIVMSG"}
        )
        assert "[PARSING] bad value | Exception: ValueError: x | Context: command=PRIVMSG" in caplog.text
        assert error_aggregator.get_error_summary()["parsing"]["total_count"] == 1

    def test_summary_keeps_count_and_latest_entry(self):
        agg = ErrorAggregator()
        agg.record_error("handler", "first")
        agg.record_error("handler", "second", {"kind": "PRIVMSG"})
        agg.record_error("parsing", "bad range")
        summary = agg.get_error_summary()
        assert summary["handler"] == {
            "total_count": 2,
            "last_message": "second",
            "last_context": {"kind": "PRIVMSG"},
        }
        assert summary["parsing"]["total_count"] == 1

    def test_reset(self):
        agg = ErrorAggregator()
        agg.record_error("handler", "boom")
        agg.reset()
        assert agg.get_error_summary() == {}

    def test_error_summary_report(self, caplog):
        caplog.set_level(logging.INFO)
        LoggerConfigurator.log_error_summary()
        assert "No decoder or handler failures recorded" in caplog.text
        error_aggregator.record_error("handler", "boom")
        LoggerConfigurator.log_error_summary()
        assert "handler: 1 failure(s), last: boom" in caplog.text
