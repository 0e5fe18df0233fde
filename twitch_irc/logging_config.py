"""
Logging configuration for applications consuming the Twitch IRC decoder.

Sets up colored console output with colorlog and keeps per-category counts
of decoder and handler failures reported through ``log_structured_error``.
"""

import atexit
import logging
import os
import sys
import threading
from collections import Counter
from typing import Any

import colorlog

from .logs.logger import logger as event_logger


class ErrorAggregator:
    """Counts failures per category and remembers the latest one."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.counts: Counter[str] = Counter()
        self.last: dict[str, dict[str, Any]] = {}

    def record_error(self, error_type: str, message: str, context: dict[str, Any] | None = None) -> None:
        with self.lock:
            self.counts[error_type] += 1
            self.last[error_type] = {"message": message, "context": context or {}}

    def get_error_summary(self) -> dict[str, Any]:
        """Return ``{category: {total_count, last_message, last_context}}``."""
        with self.lock:
            return {
                error_type: {
                    "total_count": count,
                    "last_message": self.last[error_type]["message"],
                    "last_context": self.last[error_type]["context"],
                }
                for error_type, count in self.counts.items()
            }

    def reset(self) -> None:
        with self.lock:
            self.counts.clear()
            self.last.clear()


# Global error aggregator instance
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log a categorized failure on one line and count it.

    Args:
        error_type: Category from ``errors.handling.classify_error``
            (``parsing``, ``handler``, ``internal`` or ``unknown``)
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Extra fields such as the IRC command or raw line
        level: Logging level (default: ERROR)
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))
    error_aggregator.record_error(error_type, message, context)


class LoggerConfigurator:
    """Colored console logging for a process that decodes Twitch IRC.

    Typical use at application start-up::

        from twitch_irc.logging_config import LoggerConfigurator

        LoggerConfigurator({"final_summary": True}).configure()
    """

    def __init__(self, config=None):
        """Initialize the configurator.

        Args:
            config: Optional config dict. ``final_summary`` (default True)
                logs the failure counts per category when the process exits.
        """
        self.config = config or {}

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "magenta"}},
            reset=True,
        )

    def configure(self) -> int:
        """Install the colored handler on the root logger.

        ``DEBUG=true|1|yes`` selects DEBUG, which also lets the decoder's
        skipped-emote and unknown-command events through. Returns the level.
        """
        debug_env = os.environ.get("DEBUG", "").lower()
        log_level = logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(self.build_formatter())
        root_logger = logging.getLogger()
        root_logger.handlers[:] = [handler]
        root_logger.setLevel(log_level)
        event_logger.set_level(log_level)

        if self.config.get("final_summary", True):
            atexit.register(self.log_error_summary)
        return log_level

    @staticmethod
    def log_error_summary() -> None:
        summary = error_aggregator.get_error_summary()
        if not summary:
            logging.info("No decoder or handler failures recorded")
            return
        for error_type, stats in sorted(summary.items()):
            logging.warning(
                f"{error_type}: {stats['total_count']} failure(s), last: {stats['last_message']}"
            )
