import logging

import pytest

from twitch_irc.logging_config import error_aggregator


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):  # type: ignore[no-untyped-def]
    """Keep log formatting independent of the developer's shell."""
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(autouse=True)
def _reset_error_aggregator():  # type: ignore[no-untyped-def]
    error_aggregator.reset()
    yield
    error_aggregator.reset()


@pytest.fixture
def root_level():  # type: ignore[no-untyped-def]
    """Restore the root logger level after tests that reconfigure logging."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers
