"""Centralized internal error hierarchy.

These exceptions give the ingestion pipeline semantic categories to decide
what is local to one frame or message and what stops the read loop. Only the
client raises transport errors; wrap raw ``OSError`` instead of letting it
escape to callers.

Classes:
  InternalError         – Base for all internal errors.
  ProtocolError         – A frame or chunk could not be decoded.
  EmptyInputError       – Empty frame or chunk (recoverable no-op).
  MalformedFrameError   – Frame carries no command token.
  HandlingError         – A decoded message could not be applied.
  UnknownCommandError   – No handler registered for a command name.
  MissingStateError     – A channel or roster entry is absent.
  MessageHandlingError  – A handler rejected a message's parameters.
  TransportError        – Read/write failure or end of stream (terminal).
  ConfigError           – Invalid startup configuration.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal errors with metadata support.

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


class ProtocolError(InternalError):
    """Raised when raw protocol input cannot be turned into a message."""


class EmptyInputError(ProtocolError):
    """Empty frame or empty chunk with nothing pending.

    This is an expected condition (for example at stream start) and callers
    treat it as "nothing to process".
    """


class MalformedFrameError(ProtocolError):
    """Raised when a frame does not contain a command token."""


class HandlingError(InternalError):
    """Raised when a decoded message cannot be applied to session state."""


class UnknownCommandError(HandlingError):
    """No handler is registered for the resolved command name."""

    def __init__(self, command: str, *, data: Mapping[str, object] | None = None):
        super().__init__(f"unknown command: {command}", data=data)
        self.command = command


class MissingStateError(HandlingError):
    """A channel or roster entry referenced by a message is absent."""


class MessageHandlingError(HandlingError):
    """A handler could not apply a message (missing or invalid parameters)."""


class TransportError(InternalError):
    """Read or write failure on the underlying stream, or end of stream.

    Terminal for the ingestion loop; the surrounding process decides what
    happens next.
    """


class ConfigError(InternalError):
    """Raised when the client configuration cannot be loaded or validated."""


__all__ = [
    "InternalError",
    "ProtocolError",
    "EmptyInputError",
    "MalformedFrameError",
    "HandlingError",
    "UnknownCommandError",
    "MissingStateError",
    "MessageHandlingError",
    "TransportError",
    "ConfigError",
]
