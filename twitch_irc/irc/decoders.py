"""Shared sub-decoders for tag values.

Every helper degrades to an empty/zero value on malformed input; nothing in
here raises to the caller.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime, timedelta

from ..constants import (
    ACTION_PREFIX,
    ACTION_SUFFIX,
    MSG_PARAM_BOOL_KEYS,
    MSG_PARAM_INT_KEYS,
    MSG_PARAM_MARKER,
    ZERO_TIME,
)
from ..errors.internal import ParsingError
from ..logs.logger import logger
from .framing import FramedLine
from .models import Emote, ParamValue, User

_INT_RE = re.compile(r"[+-]?[0-9]+")
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def parse_int(raw: str | None, default: int = 0) -> int:
    """Parse a decimal integer, returning ``default`` for anything else."""
    if raw is None or not _INT_RE.fullmatch(raw):
        return default
    try:
        return int(raw)
    except ValueError:
        # Past the interpreter's int digit limit
        return default


def parse_time(raw: str | None) -> datetime:
    """Convert a millisecond epoch string into an aware UTC datetime."""
    if not raw or not _INT_RE.fullmatch(raw):
        return ZERO_TIME
    try:
        return _EPOCH + timedelta(milliseconds=int(raw))
    except (OverflowError, ValueError):
        return ZERO_TIME


def parse_badges(raw_badges: str) -> dict[str, int]:
    """Decode ``name/level,name/level`` into a mapping.

    Pairs without a ``/level`` half are skipped; a non-numeric level maps to 0.
    """
    badges: dict[str, int] = {}
    if not raw_badges:
        return badges
    for badge in raw_badges.split(","):
        name, sep, level = badge.partition("/")
        if not sep or not name:
            logger.log_event("parser", "badge_skipped", level=logging.DEBUG, badge=badge)
            continue
        badges[name] = parse_int(level)
    return badges


def parse_user(message: FramedLine) -> User:
    tags = message.tags
    name = message.source.username
    display_name = tags.get("display-name", "")

    # USERSTATE has no source username, only a display-name tag
    if not name and display_name:
        name = display_name.lower().replace(" ", "", 1)

    return User(
        id=tags.get("user-id", ""),
        name=name,
        display_name=display_name,
        color=tags.get("color", ""),
        badges=parse_badges(tags.get("badges", "")),
    )


def _parse_range(raw_range: str) -> tuple[int, int]:
    first, sep, last = raw_range.partition("-")
    if not sep or not _INT_RE.fullmatch(first) or not _INT_RE.fullmatch(last):
        raise ParsingError("invalid emote range", data={"range": raw_range})
    try:
        return int(first), int(last)
    except ValueError as e:
        raise ParsingError("emote range too large", data={"range": raw_range}) from e


def parse_emotes(raw_emotes: str, text: str) -> tuple[Emote, ...]:
    """Decode the ``emotes`` tag against a message body.

    Format: ``id:first-last,first-last/id:first-last``. Offsets count code
    points and are inclusive on both ends. The emote name is the body slice
    at the first range; ``count`` is the number of ranges in the group.
    """
    emotes: list[Emote] = []
    if not raw_emotes:
        return ()
    for group in raw_emotes.split("/"):
        emote_id, sep, ranges = group.partition(":")
        try:
            if not sep or not emote_id or not ranges:
                raise ParsingError("invalid emote group", data={"group": group})
            first, last = _parse_range(ranges.split(",", 1)[0])
        except ParsingError:
            logger.log_event("parser", "emote_skipped", level=logging.DEBUG, group=group)
            continue
        emotes.append(
            Emote(
                name=text[first : last + 1],
                id=emote_id,
                count=ranges.count(",") + 1,
            )
        )
    return tuple(emotes)


def split_action(text: str) -> tuple[str, bool]:
    """Strip CTCP ``ACTION`` framing, returning (body, is_action)."""
    if (
        len(text) > len(ACTION_PREFIX)
        and text.startswith(ACTION_PREFIX)
        and text.endswith(ACTION_SUFFIX)
    ):
        body = text[len(ACTION_PREFIX) : -len(ACTION_SUFFIX)]
        return body.removeprefix(" "), True
    return text, False


def parse_msg_params(tags: dict[str, str]) -> dict[str, ParamValue]:
    """Collect ``msg-param-*`` tags with per-key coercion.

    Known counters become ints, ``msg-param-should-share-streak`` becomes a
    bool; every other key keeps its (already unescaped) string value.
    """
    params: dict[str, ParamValue] = {}
    for key, value in tags.items():
        if MSG_PARAM_MARKER not in key:
            continue
        if key in MSG_PARAM_INT_KEYS:
            params[key] = parse_int(value)
        elif key in MSG_PARAM_BOOL_KEYS:
            params[key] = value == "1"
        else:
            params[key] = value
    return params
