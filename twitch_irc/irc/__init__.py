"""Twitch IRC decoding package.

Contains the line framer, tag decoder, per-command decoders, the read-only
command dispatch table and the consumer-side line dispatcher.

Typical consumer set-up::

    from twitch_irc.irc import IRCDispatcher, MessageType
    from twitch_irc.logging_config import LoggerConfigurator

    LoggerConfigurator().configure()
    dispatcher = IRCDispatcher()
    dispatcher.add_handler(MessageType.PRIVMSG, on_privmsg)
    buffer = await dispatcher.process_incoming_data(buffer, chunk)
"""

from .dispatcher import IRCDispatcher  # noqa: F401
from .framing import FramedLine, Source, frame_line  # noqa: F401
from .models import (  # noqa: F401
    BaseMessage,
    ClearChatMessage,
    Emote,
    Message,
    MessageType,
    NamesMessage,
    NoticeMessage,
    ParamValue,
    PingMessage,
    PongMessage,
    PrivateMessage,
    RawMessage,
    ReconnectMessage,
    RoomStateMessage,
    User,
    UserJoinMessage,
    UserNoticeMessage,
    UserPartMessage,
    UserStateMessage,
    WhisperMessage,
)
from .parser import parse_lines, parse_message  # noqa: F401
from .registry import MESSAGE_TYPES, parse_message_type  # noqa: F401
from .tags import parse_tags, unescape_tag_value  # noqa: F401

__all__ = [
    "IRCDispatcher",
    "FramedLine",
    "Source",
    "frame_line",
    "BaseMessage",
    "ClearChatMessage",
    "Emote",
    "Message",
    "MessageType",
    "NamesMessage",
    "NoticeMessage",
    "ParamValue",
    "PingMessage",
    "PongMessage",
    "PrivateMessage",
    "RawMessage",
    "ReconnectMessage",
    "RoomStateMessage",
    "User",
    "UserJoinMessage",
    "UserNoticeMessage",
    "UserPartMessage",
    "UserStateMessage",
    "WhisperMessage",
    "parse_lines",
    "parse_message",
    "MESSAGE_TYPES",
    "parse_message_type",
    "parse_tags",
    "unescape_tag_value",
]
