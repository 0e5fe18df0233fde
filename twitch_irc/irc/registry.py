"""Command dispatch table.

Built once at import time and exposed read-only; lookups need no locking.
"""

from __future__ import annotations

from collections.abc import Callable
from types import MappingProxyType
from typing import NamedTuple

from . import message_parsers as p
from .framing import FramedLine
from .models import Message, MessageType


class MessageTypeDescription(NamedTuple):
    kind: MessageType
    parser: Callable[[FramedLine], Message]


MESSAGE_TYPES: MappingProxyType[str, MessageTypeDescription] = MappingProxyType(
    {
        "WHISPER": MessageTypeDescription(MessageType.WHISPER, p.parse_whisper_message),
        "PRIVMSG": MessageTypeDescription(MessageType.PRIVMSG, p.parse_private_message),
        "CLEARCHAT": MessageTypeDescription(
            MessageType.CLEARCHAT, p.parse_clear_chat_message
        ),
        "ROOMSTATE": MessageTypeDescription(
            MessageType.ROOMSTATE, p.parse_room_state_message
        ),
        "USERNOTICE": MessageTypeDescription(
            MessageType.USERNOTICE, p.parse_user_notice_message
        ),
        "USERSTATE": MessageTypeDescription(
            MessageType.USERSTATE, p.parse_user_state_message
        ),
        "NOTICE": MessageTypeDescription(MessageType.NOTICE, p.parse_notice_message),
        "JOIN": MessageTypeDescription(MessageType.JOIN, p.parse_user_join_message),
        "PART": MessageTypeDescription(MessageType.PART, p.parse_user_part_message),
        "RECONNECT": MessageTypeDescription(
            MessageType.RECONNECT, p.parse_reconnect_message
        ),
        # RPL_NAMREPLY
        "353": MessageTypeDescription(MessageType.NAMES, p.parse_names_message),
        "PING": MessageTypeDescription(MessageType.PING, p.parse_ping_message),
        "PONG": MessageTypeDescription(MessageType.PONG, p.parse_pong_message),
    }
)


def parse_message_type(command: str) -> MessageType:
    """Return the kind registered for ``command`` (case-sensitive) or UNSET."""
    description = MESSAGE_TYPES.get(command)
    return description.kind if description else MessageType.UNSET
