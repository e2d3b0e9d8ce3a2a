from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    HandlingError,
    InternalError,
    ProtocolError,
    TransportError,
)


def classify_error(error: BaseException) -> str:
    """Return the reporting category for an exception.

    Categories mirror the internal hierarchy so the error aggregator can count
    decode failures, handler failures and transport failures separately.
    """
    if isinstance(error, TransportError | OSError | ConnectionError):
        return "transport"
    if isinstance(error, ProtocolError):
        return "protocol"
    if isinstance(error, HandlingError):
        return "handling"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(
    message: str, error: Exception, context: dict[str, object] | None = None
) -> None:
    """Logs an error message with the associated exception details.

    The exception is categorized, its structured ``data`` merged into the
    context, and the result forwarded to structured logging for aggregation.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged: dict[str, object] = {}
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


__all__ = ["classify_error", "log_error"]
