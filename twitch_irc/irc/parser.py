"""Top-level Twitch IRC line decoding.

``parse_message`` turns one CRLF-stripped line into one typed record. It
never raises: malformed structure degrades to empty fields and unknown
commands come back as ``RawMessage`` with kind ``UNSET``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..errors.handling import log_error
from .framing import frame_line
from .message_parsers import parse_raw_message, undecoded_message
from .models import Message
from .registry import MESSAGE_TYPES


def parse_message(line: str) -> Message:
    """Decode one line.

    If a registered decoder raises, the failure is logged and the line comes
    back as a ``RawMessage`` with kind ``UNSET`` and the fallback body, so
    handlers subscribed to the command's kind never see a record of the
    wrong shape.
    """
    framed = frame_line(line)
    description = MESSAGE_TYPES.get(framed.command)
    if description is None:
        return parse_raw_message(framed)
    try:
        return description.parser(framed)
    except Exception as e:  # noqa: BLE001
        log_error("Decoder failed", e, {"command": framed.command, "raw": line})
        return undecoded_message(framed)


def parse_lines(lines: Iterable[str]) -> Iterator[Message]:
    """Decode lines in order, skipping blank ones."""
    for line in lines:
        line = line.rstrip("\r\n")
        if line.strip():
            yield parse_message(line)
