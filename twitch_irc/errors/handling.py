from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import HandlerError, InternalError, ParsingError


def classify_error(error: BaseException) -> str:
    """Return the aggregation category for an exception."""
    if isinstance(error, ParsingError):
        return "parsing"
    if isinstance(error, HandlerError):
        return "handler"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The error is categorized from its type and routed through structured
    logging so repeated failures show up in the error aggregator.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    # Wrapped handler errors carry their context in .data
    merged: dict = {}
    if isinstance(error, InternalError):
        merged.update(error.data)
    if context:
        merged.update(context)

    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=merged or None,
    )
