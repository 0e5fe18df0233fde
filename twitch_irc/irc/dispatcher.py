"""Line buffering and per-kind message dispatch.

Consumer side of the decoder: feeds CRLF-delimited chunks from a transport
through ``parse_message`` and hands each record, in input order, to the
handlers registered for its kind.
"""

from __future__ import annotations

import inspect
import logging
import time
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import TypeAlias

from ..constants import IRC_LINE_DELIMITER, IRC_LOG_RAW_LINES, IRC_MAX_BUFFER_CHARS
from ..errors.handling import log_error
from ..errors.internal import HandlerError
from ..logs.logger import logger
from .models import Message, MessageType
from .parser import parse_message

Handler: TypeAlias = Callable[[Message], Awaitable[None] | None]


class IRCDispatcher:
    def __init__(
        self,
        *,
        max_buffer_chars: int = IRC_MAX_BUFFER_CHARS,
        log_raw_lines: bool = IRC_LOG_RAW_LINES,
    ) -> None:
        self.max_buffer_chars = max_buffer_chars
        self.log_raw_lines = log_raw_lines
        self.last_message_at: float | None = None
        self._handlers: dict[MessageType, list[Handler]] = defaultdict(list)
        # Receive every kind, after the kind-specific handlers
        self._catch_all: list[Handler] = []

    def add_handler(self, kind: MessageType | None, handler: Handler) -> None:
        """Register ``handler`` for ``kind``; ``None`` subscribes to all kinds."""
        if kind is None:
            self._catch_all.append(handler)
        else:
            self._handlers[kind].append(handler)
        logger.log_event(
            "irc",
            "handler_registered",
            level=logging.DEBUG,
            kind=kind.name if kind is not None else "*",
        )

    def handlers_for(self, kind: MessageType) -> list[Handler]:
        return [*self._handlers.get(kind, ()), *self._catch_all]

    async def process_incoming_data(self, buffer: str, new_data: str) -> str:
        """Append ``new_data`` to ``buffer`` and dispatch every complete line.

        Returns the unterminated remainder for the next call.
        """
        buffer += new_data
        while IRC_LINE_DELIMITER in buffer:
            line, buffer = buffer.split(IRC_LINE_DELIMITER, 1)
            if line.strip():
                await self.dispatch_line(line)
        if len(buffer) > self.max_buffer_chars:
            logger.log_event(
                "irc", "buffer_overflow", level=logging.WARNING, size=len(buffer)
            )
            return ""
        return buffer

    async def dispatch_line(self, line: str) -> Message:
        if self.log_raw_lines:
            logger.log_event("irc", "raw", level=logging.DEBUG, raw=line)
        self.last_message_at = time.time()

        message = parse_message(line)
        if message.kind is MessageType.RECONNECT:
            logger.log_event("irc", "reconnect_requested", command=message.raw_type)

        handlers = self.handlers_for(message.kind)
        if not handlers:
            logger.log_event(
                "irc",
                "no_handler",
                level=logging.DEBUG,
                kind=message.kind.name,
                command=message.raw_type,
            )
            return message
        logger.log_event(
            "irc",
            "handler_dispatch",
            level=logging.DEBUG,
            kind=message.kind.name,
            count=len(handlers),
            command=message.raw_type,
            channel=getattr(message, "channel", None),
        )
        for handler in handlers:
            await self._invoke(handler, message)
        return message

    async def _invoke(self, handler: Handler, message: Message) -> None:
        try:
            result = handler(message)
            if inspect.isawaitable(result):
                await result
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "handler_error",
                level=logging.ERROR,
                kind=message.kind.name,
                command=message.raw_type,
                error=str(e),
                error_type=type(e).__name__,
            )
            wrapped = HandlerError(
                str(e),
                data={
                    "kind": message.kind.name,
                    "handler": getattr(handler, "__name__", repr(handler)),
                },
            )
            wrapped.__cause__ = e
            log_error("Message handler failed", wrapped)
