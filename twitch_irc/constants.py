"""
Configuration constants for the Twitch IRC message decoder

This module contains the protocol constants used by the decoders and the
runtime knobs of the line dispatcher. Each knob can be overridden by setting
an environment variable with the same name.
"""

import os
from datetime import UTC, datetime


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_bool(name: str, default: bool) -> bool:
    """Retrieve a boolean flag from an environment variable.

    Accepts true/1/yes and false/0/no (case insensitive). Anything else prints
    a warning and returns the default value.
    """
    value = os.getenv(name)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    print(f"Warning: Invalid boolean value for {name}='{value}', using default {default}")
    return default


# Dispatcher knobs
IRC_LOG_RAW_LINES = _get_env_bool(
    "IRC_LOG_RAW_LINES", False
)  # Log every received line at DEBUG before decoding
IRC_MAX_BUFFER_CHARS = _get_env_int(
    "IRC_MAX_BUFFER_CHARS", 65536
)  # Discard a partial line buffer that grows past this without a CRLF

# Line delimiter used by the transport
IRC_LINE_DELIMITER = "\r\n"

# ROOMSTATE settings copied into RoomStateMessage.state when present
ROOM_STATE_TAGS = (
    "emote-only",
    "followers-only",
    "r9k",
    "rituals",
    "slow",
    "subs-only",
)

# USERNOTICE msg-param-* keys coerced to int / bool; all others stay strings
MSG_PARAM_MARKER = "msg-param"
MSG_PARAM_INT_KEYS = frozenset(
    {
        "msg-param-cumulative-months",
        "msg-param-months",
        "msg-param-streak-months",
        "msg-param-viewerCount",
    }
)
MSG_PARAM_BOOL_KEYS = frozenset({"msg-param-should-share-streak"})

# CTCP ACTION framing used by /me messages in channels
ACTION_PREFIX = "\x01ACTION"
ACTION_SUFFIX = "\x01"
# Whispers sent with /me keep the literal command prefix
ME_PREFIX = "/me "

# Sentinel for missing or invalid tmi-sent-ts values
ZERO_TIME = datetime.min.replace(tzinfo=UTC)
