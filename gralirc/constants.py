"""
Configuration constants for the gral.irc client

This module contains all tunable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    """Retrieve a non-empty string from an environment variable or the default."""
    value = os.getenv(name)
    if value is not None and value.strip():
        return value.strip()
    return default


# Connection defaults
DEFAULT_HOST = _get_env_str("DEFAULT_HOST", "localhost")  # IRC server host
DEFAULT_PORT = _get_env_int("DEFAULT_PORT", 6667)  # Plain-text IRC port
CONNECT_TIMEOUT_SECONDS = _get_env_float(
    "CONNECT_TIMEOUT_SECONDS", 15.0
)  # Applies to connection setup only, never to reads
READ_CHUNK_SIZE = _get_env_int("READ_CHUNK_SIZE", 1024)  # Bytes per transport read

# Identity defaults
DEFAULT_NICK = _get_env_str("DEFAULT_NICK", "[bot]Gral-irc")
DEFAULT_REALNAME = _get_env_str("DEFAULT_REALNAME", "gral.irc bot")

# Channel joined once the server finishes its welcome banner
AUTOJOIN_CHANNEL = _get_env_str("AUTOJOIN_CHANNEL", "#gral.irc")

# Protocol framing and naming
LINE_DELIMITER = b"\r\n"
CHANNEL_PREFIXES = "#&+!"  # First character of a channel name
NICK_PREFIX_SIGILS = "~&@%+"  # Privilege markers in names replies

# Configuration file
CONFIG_FILE_ENV = "GRAL_IRC_CONF_FILE"
DEFAULT_CONFIG_FILE = "gral_irc.conf"
