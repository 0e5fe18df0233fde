"""Typed event records produced by the message parser.

Every record shares the ``raw`` / ``kind`` / ``raw_type`` / ``tags`` base
fields. The ``Message`` union lists the closed set of variants; match on
``kind`` (or ``isinstance``) to route them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TypeAlias

from ..constants import ZERO_TIME

# Value stored in UserNoticeMessage.msg_params
ParamValue: TypeAlias = str | int | bool


class MessageType(Enum):
    UNSET = -1
    WHISPER = 0
    PRIVMSG = 1
    CLEARCHAT = 2
    ROOMSTATE = 3
    USERNOTICE = 4
    USERSTATE = 5
    NOTICE = 6
    JOIN = 7
    PART = 8
    RECONNECT = 9
    NAMES = 10
    PING = 11
    PONG = 12


@dataclass(frozen=True, slots=True)
class User:
    id: str = ""
    name: str = ""
    display_name: str = ""
    color: str = ""
    badges: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Emote:
    name: str
    id: str
    count: int = 1


@dataclass(frozen=True, slots=True, kw_only=True)
class BaseMessage:
    raw: str
    kind: MessageType
    raw_type: str
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True, kw_only=True)
class RawMessage(BaseMessage):
    """Any command without a dedicated decoder."""

    text: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class WhisperMessage(BaseMessage):
    user: User = field(default_factory=User)
    target: str = ""
    text: str = ""
    action: bool = False
    emotes: tuple[Emote, ...] = ()
    message_id: str = ""
    thread_id: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class PrivateMessage(BaseMessage):
    user: User = field(default_factory=User)
    channel: str = ""
    room_id: str = ""
    id: str = ""
    time: datetime = ZERO_TIME
    text: str = ""
    action: bool = False
    emotes: tuple[Emote, ...] = ()
    bits: int = 0


@dataclass(frozen=True, slots=True, kw_only=True)
class ClearChatMessage(BaseMessage):
    channel: str = ""
    room_id: str = ""
    time: datetime = ZERO_TIME
    target_user_id: str = ""
    target_username: str = ""
    ban_duration: int = 0
    ban_reason: str = ""
    text: str = ""

    @property
    def is_timeout(self) -> bool:
        return "ban-duration" in self.tags

    @property
    def is_ban(self) -> bool:
        """Permanent ban: a target without a ban-duration tag."""
        return bool(self.target_username) and not self.is_timeout


@dataclass(frozen=True, slots=True, kw_only=True)
class RoomStateMessage(BaseMessage):
    channel: str = ""
    room_id: str = ""
    state: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True, kw_only=True)
class UserNoticeMessage(BaseMessage):
    user: User = field(default_factory=User)
    channel: str = ""
    room_id: str = ""
    id: str = ""
    time: datetime = ZERO_TIME
    text: str = ""
    action: bool = False
    emotes: tuple[Emote, ...] = ()
    msg_id: str = ""
    msg_params: dict[str, ParamValue] = field(default_factory=dict)
    system_msg: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class UserStateMessage(BaseMessage):
    user: User = field(default_factory=User)
    channel: str = ""
    emote_sets: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class NoticeMessage(BaseMessage):
    channel: str = ""
    msg_id: str = ""
    text: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class UserJoinMessage(BaseMessage):
    user: str = ""
    channel: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class UserPartMessage(BaseMessage):
    user: str = ""
    channel: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconnectMessage(BaseMessage):
    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class NamesMessage(BaseMessage):
    channel: str = ""
    users: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class PingMessage(BaseMessage):
    text: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class PongMessage(BaseMessage):
    text: str = ""


Message: TypeAlias = (
    RawMessage
    | WhisperMessage
    | PrivateMessage
    | ClearChatMessage
    | RoomStateMessage
    | UserNoticeMessage
    | UserStateMessage
    | NoticeMessage
    | UserJoinMessage
    | UserPartMessage
    | ReconnectMessage
    | NamesMessage
    | PingMessage
    | PongMessage
)
