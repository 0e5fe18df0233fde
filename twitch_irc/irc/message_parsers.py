"""Per-command decoders.

Each decoder takes a framed line and returns one populated record. Missing
parameters or tags degrade to the field defaults.

Adding a new message kind:
1. add a member to ``MessageType`` and a record class in ``models``
2. write a ``parse_xxx_message`` decoder here
3. register command -> (kind, decoder) in ``registry.MESSAGE_TYPES``
"""

from __future__ import annotations

import logging
from typing import Any

from ..constants import ME_PREFIX, ROOM_STATE_TAGS
from ..logs.logger import logger
from ..utils.helpers import format_duration
from .decoders import (
    parse_emotes,
    parse_int,
    parse_msg_params,
    parse_time,
    parse_user,
    split_action,
)
from .framing import FramedLine
from .models import (
    ClearChatMessage,
    MessageType,
    NamesMessage,
    NoticeMessage,
    PingMessage,
    PongMessage,
    PrivateMessage,
    RawMessage,
    ReconnectMessage,
    RoomStateMessage,
    UserJoinMessage,
    UserNoticeMessage,
    UserPartMessage,
    UserStateMessage,
    WhisperMessage,
)


def _base(message: FramedLine, kind: MessageType) -> dict[str, Any]:
    return {
        "raw": message.raw,
        "kind": kind,
        "raw_type": message.command,
        "tags": message.tags,
    }


def _channel(message: FramedLine, index: int = 0) -> str:
    return message.param(index).removeprefix("#")


def _body(message: FramedLine) -> str:
    # The long parameter is always last; a lone param is the target, not a body
    if len(message.params) < 2:
        return ""
    return message.params[-1]


def parse_raw_message(message: FramedLine) -> RawMessage:
    """Fallback for commands without a dedicated decoder."""
    logger.log_event(
        "parser",
        "unknown_command",
        level=logging.DEBUG,
        raw_type=message.command,
    )
    return undecoded_message(message)


def undecoded_message(message: FramedLine) -> RawMessage:
    """Build an UNSET record whose body is a best-effort guess.

    The guess is everything from the first parameter that is not a channel
    onwards.
    """
    text = ""
    for i, value in enumerate(message.params):
        if "#" not in value:
            text = " ".join(message.params[i:])
            break
    return RawMessage(**_base(message, MessageType.UNSET), text=text)


def parse_whisper_message(message: FramedLine) -> WhisperMessage:
    text, action = split_action(_body(message))
    if not action and text.startswith(ME_PREFIX):
        text, action = text[len(ME_PREFIX) :], True
    tags = message.tags
    return WhisperMessage(
        **_base(message, MessageType.WHISPER),
        user=parse_user(message),
        target=message.param(0),
        text=text,
        action=action,
        emotes=parse_emotes(tags.get("emotes", ""), text),
        message_id=tags.get("message-id", ""),
        thread_id=tags.get("thread-id", ""),
    )


def parse_private_message(message: FramedLine) -> PrivateMessage:
    text, action = split_action(_body(message))
    tags = message.tags
    return PrivateMessage(
        **_base(message, MessageType.PRIVMSG),
        user=parse_user(message),
        channel=_channel(message),
        room_id=tags.get("room-id", ""),
        id=tags.get("id", ""),
        time=parse_time(tags.get("tmi-sent-ts")),
        text=text,
        action=action,
        emotes=parse_emotes(tags.get("emotes", ""), text),
        bits=parse_int(tags.get("bits")),
    )


def _clear_chat_text(target: str, duration: int | None, reason: str) -> str:
    if not target:
        return "chat has been cleared"
    if duration is None:
        text = f"{target} was permanently banned"
    else:
        text = f"{target} was timed out for {format_duration(duration)}"
    return f"{text}: {reason}" if reason else text


def parse_clear_chat_message(message: FramedLine) -> ClearChatMessage:
    tags = message.tags
    # Absent ban-duration means a permanent ban, not a zero-length timeout
    duration = parse_int(tags["ban-duration"]) if "ban-duration" in tags else None
    target = message.param(1) if len(message.params) >= 2 else ""
    reason = tags.get("ban-reason", "")
    return ClearChatMessage(
        **_base(message, MessageType.CLEARCHAT),
        channel=_channel(message),
        room_id=tags.get("room-id", ""),
        time=parse_time(tags.get("tmi-sent-ts")),
        target_user_id=tags.get("target-user-id", ""),
        target_username=target,
        ban_duration=duration or 0,
        ban_reason=reason,
        text=_clear_chat_text(target, duration, reason),
    )


def parse_room_state_message(message: FramedLine) -> RoomStateMessage:
    tags = message.tags
    return RoomStateMessage(
        **_base(message, MessageType.ROOMSTATE),
        channel=_channel(message),
        room_id=tags.get("room-id", ""),
        state={tag: parse_int(tags[tag]) for tag in ROOM_STATE_TAGS if tag in tags},
    )


def parse_user_notice_message(message: FramedLine) -> UserNoticeMessage:
    text, action = split_action(_body(message))
    tags = message.tags
    return UserNoticeMessage(
        **_base(message, MessageType.USERNOTICE),
        user=parse_user(message),
        channel=_channel(message),
        room_id=tags.get("room-id", ""),
        id=tags.get("id", ""),
        time=parse_time(tags.get("tmi-sent-ts")),
        text=text,
        action=action,
        emotes=parse_emotes(tags.get("emotes", ""), text),
        msg_id=tags.get("msg-id", ""),
        msg_params=parse_msg_params(tags),
        system_msg=tags.get("system-msg", "").replace("\n", "").strip(),
    )


def parse_user_state_message(message: FramedLine) -> UserStateMessage:
    raw_sets = message.tags.get("emote-sets", "")
    return UserStateMessage(
        **_base(message, MessageType.USERSTATE),
        user=parse_user(message),
        channel=_channel(message),
        emote_sets=tuple(raw_sets.split(",")) if raw_sets else (),
    )


def parse_notice_message(message: FramedLine) -> NoticeMessage:
    return NoticeMessage(
        **_base(message, MessageType.NOTICE),
        channel=_channel(message),
        msg_id=message.tags.get("msg-id", ""),
        text=_body(message),
    )


def parse_user_join_message(message: FramedLine) -> UserJoinMessage:
    return UserJoinMessage(
        **_base(message, MessageType.JOIN),
        user=message.source.username,
        channel=_channel(message),
    )


def parse_user_part_message(message: FramedLine) -> UserPartMessage:
    return UserPartMessage(
        **_base(message, MessageType.PART),
        user=message.source.username,
        channel=_channel(message),
    )


def parse_reconnect_message(message: FramedLine) -> ReconnectMessage:
    return ReconnectMessage(**_base(message, MessageType.RECONNECT))


def parse_names_message(message: FramedLine) -> NamesMessage:
    # RPL_NAMREPLY: <client> <symbol> <#channel> :<names>
    if len(message.params) != 4:
        return NamesMessage(**_base(message, MessageType.NAMES))
    return NamesMessage(
        **_base(message, MessageType.NAMES),
        channel=_channel(message, 2),
        users=tuple(message.params[3].split()),
    )


def _first_token(value: str) -> str:
    return value.split(" ", 1)[0]


def parse_ping_message(message: FramedLine) -> PingMessage:
    text = _first_token(message.params[0]) if len(message.params) == 1 else ""
    return PingMessage(**_base(message, MessageType.PING), text=text)


def parse_pong_message(message: FramedLine) -> PongMessage:
    # PONG <server> :<payload>
    text = _first_token(message.params[1]) if len(message.params) == 2 else ""
    return PongMessage(**_base(message, MessageType.PONG), text=text)
