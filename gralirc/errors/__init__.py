"""Error hierarchy and reporting helpers."""

from .internal import (  # noqa: F401
    ConfigError,
    EmptyInputError,
    HandlingError,
    InternalError,
    MalformedFrameError,
    MessageHandlingError,
    MissingStateError,
    ProtocolError,
    TransportError,
    UnknownCommandError,
)

__all__ = [
    "ConfigError",
    "EmptyInputError",
    "HandlingError",
    "InternalError",
    "MalformedFrameError",
    "MessageHandlingError",
    "MissingStateError",
    "ProtocolError",
    "TransportError",
    "UnknownCommandError",
]
