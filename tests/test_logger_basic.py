from __future__ import annotations

import logging

from twitch_irc.irc.parser import parse_message
from twitch_irc.logs.logger import BotLogger, SimpleFormatter


def test_logger_template_and_fallback(caplog) -> None:  # type: ignore[no-untyped-def]
    log = BotLogger("test_logger")
    caplog.set_level(logging.INFO)

    log.log_event("irc", "reconnect_requested")
    # Unknown template should fallback and mark derived
    log.log_event("custom_domain", "custom_action", extra_field=123)

    msgs = [r.message for r in caplog.records]
    assert any("Server requested reconnect" in m for m in msgs)
    assert any("custom domain: custom action" in m for m in msgs)


def test_template_with_missing_field_uses_raw_template(caplog) -> None:  # type: ignore[no-untyped-def]
    log = BotLogger("test_logger_missing")
    caplog.set_level(logging.INFO)
    log.log_event("irc", "no_handler")
    assert "No handler registered for {kind}" in caplog.text


def test_prefix_carries_command_and_channel(caplog) -> None:  # type: ignore[no-untyped-def]
    log = BotLogger("test_logger_prefix")
    caplog.set_level(logging.INFO)
    log.log_event("irc", "handler_dispatch", kind="PRIVMSG", count=2, command="PRIVMSG", channel="pajlada")
    assert "[PRIVMSG#pajlada" in caplog.text
    assert "Dispatching PRIVMSG to 2 handler(s)" in caplog.text


def test_debug_events_filtered_at_info(caplog) -> None:  # type: ignore[no-untyped-def]
    log = BotLogger("test_logger_filtered")
    caplog.set_level(logging.DEBUG)
    log.log_event("irc", "raw", level=logging.DEBUG, raw="PING :x")
    assert caplog.records == []


def test_logger_debug_alignment(caplog, monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setenv("DEBUG", "1")
    log = BotLogger("test_logger_debug")
    caplog.set_level(logging.DEBUG)
    log.log_event("irc", "raw", level=logging.DEBUG, raw="PING :x")
    first = caplog.records[0].message
    assert first.startswith("irc_raw")
    # Event name column padded to 32 chars before the '[' prefix
    assert len(first.split("[")[0]) >= 32
    assert "(raw=PING :x" in first


def test_unknown_command_logged_by_parser(caplog) -> None:  # type: ignore[no-untyped-def]
    caplog.set_level(logging.DEBUG, logger="twitch_irc")
    parse_message(":tmi.twitch.tv 001 justinfan :Welcome")
    assert "Unrecognized command 001, decoded as raw message" in caplog.text


def test_simple_formatter_pads_level() -> None:  # type: ignore[no-untyped-def]
    formatter = SimpleFormatter()
    formatter.enable_color = False
    record = logging.LogRecord(
        name="t", level=logging.INFO, pathname="", lineno=0, msg="hello", args=(), exc_info=None
    )
    assert formatter.format(record) == "INFO     hello"
