"""IRC subsystem package.

Contains framing, parsing, command naming, session state, dispatch, the read
loop and the connection client.
"""

from .client import IRCClient  # noqa: F401
from .codes import COMMANDS, REVERSE_COMMANDS, command_code, command_name  # noqa: F401
from .commands import OutboundCommand  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .framing import FrameReassembler  # noqa: F401
from .listener import IRCListener  # noqa: F401
from .models import Channel, ConnectionState, Identity  # noqa: F401
from .parser import IRCMessage, PrivMsg, build_privmsg, parse_irc_message  # noqa: F401
from .state import SessionState  # noqa: F401

__all__ = [
    "COMMANDS",
    "REVERSE_COMMANDS",
    "Channel",
    "ConnectionState",
    "FrameReassembler",
    "IRCClient",
    "IRCDispatcher",
    "IRCListener",
    "IRCMessage",
    "Identity",
    "OutboundCommand",
    "PrivMsg",
    "SessionState",
    "build_privmsg",
    "command_code",
    "command_name",
    "parse_irc_message",
]
