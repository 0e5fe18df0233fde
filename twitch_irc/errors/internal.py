"""Centralized internal error hierarchy.

These exceptions give semantic categories to failures inside the decoder and
the line dispatcher. None of them escape ``parse_message``: decoders catch
them and degrade to default field values.

Classes:
  InternalError        – Base for all internal errors.
  ParsingError         – A tag or parameter value could not be decoded.
  HandlerError         – A consumer handler failed while receiving a message.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ParsingError(InternalError):
    """Raised when a single protocol value is malformed.

    Used for values such as an emote range without a ``-`` separator. The
    caller skips the offending value instead of failing the whole line.
    """


class HandlerError(InternalError):
    """Wraps an exception raised by a consumer handler during dispatch."""


__all__ = [
    "InternalError",
    "ParsingError",
    "HandlerError",
]
