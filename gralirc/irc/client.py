"""Async IRC client: owns the connection and the single writer."""

from __future__ import annotations

import asyncio
import logging

from ..config.model import ClientConfig
from ..constants import CONNECT_TIMEOUT_SECONDS
from ..errors.internal import TransportError
from ..logs.logger import logger
from . import commands
from .commands import OutboundCommand
from .dispatcher import IRCDispatcher
from .listener import IRCListener
from .models import ConnectionState, Identity
from .state import SessionState

_MASKED_VERBS = frozenset({"PASS"})


def _mask(line: str) -> str:
    verb, _, _ = line.partition(" ")
    if verb.upper() in _MASKED_VERBS:
        return f"{verb} ***"
    return line


class IRCClient:  # pylint: disable=too-many-instance-attributes
    def __init__(self, config: ClientConfig, dispatcher: IRCDispatcher | None = None):
        self.config = config
        self.host = config.host
        self.port = config.port
        if dispatcher is None:
            dispatcher = IRCDispatcher(
                SessionState(me=Identity(config.nick)),
                autojoin=config.autojoin,
                triggers=None if config.triggers_enabled else {},
            )
        self.dispatcher = dispatcher
        self.state = dispatcher.state
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self.running = False
        self.connected = False
        self.connection_state = ConnectionState.DISCONNECTED
        self._write_lock = asyncio.Lock()
        self.listener = IRCListener(self)

    @property
    def nick(self) -> str:
        return self.state.me.nick

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.connection_state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.nick,
                old_state=self.connection_state.name,
                new_state=new_state.name,
            )
            self.connection_state = new_state

    async def connect(self) -> bool:
        """Open the connection and send the registration lines.

        Returns False when the server cannot be reached in time.
        """
        self._set_state(ConnectionState.CONNECTING)
        logger.log_event(
            "irc", "connect_start", user=self.nick, server=self.host, port=self.port
        )
        try:
            self.reader, self.writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port),
                timeout=CONNECT_TIMEOUT_SECONDS,
            )
        except TimeoutError:
            logger.log_event(
                "irc",
                "connect_timeout",
                level=logging.ERROR,
                user=self.nick,
                timeout=CONNECT_TIMEOUT_SECONDS,
            )
            self._set_state(ConnectionState.DISCONNECTED)
            return False
        except OSError as e:
            logger.log_event(
                "irc",
                "connect_network_error",
                level=logging.ERROR,
                user=self.nick,
                error=str(e),
            )
            self._set_state(ConnectionState.DISCONNECTED)
            return False
        self.connected = True
        self.dispatcher.reassembler.reset()
        self._set_state(ConnectionState.REGISTERING)
        await self.register()
        logger.log_event("irc", "connect_success", user=self.nick, server=self.host)
        return True

    async def register(self) -> None:
        if self.config.password:
            await self.send(commands.password(self.config.password))
        await self.send(commands.nick(self.config.nick))
        await self.send(
            commands.user(self.config.effective_username, self.config.realname)
        )

    async def send(self, command: OutboundCommand) -> None:
        await self.send_line(command.line())

    async def send_line(self, line: str) -> None:
        """Write one protocol line, appending the CR LF delimiter.

        Raises:
            TransportError: not connected, or the write failed.
        """
        if self.writer is None:
            raise TransportError("not connected", data={"line": _mask(line)})
        async with self._write_lock:
            try:
                self.writer.write(f"{line}\r\n".encode())
                await self.writer.drain()
            except OSError as e:
                raise TransportError(
                    f"write failed: {e}", data={"line": _mask(line)}
                ) from e
        logger.log_event(
            "irc", "send", level=logging.DEBUG, user=self.nick, line=_mask(line)
        )

    async def join_channel(self, channel: str) -> None:
        await self.send(commands.join(channel))

    async def part_channel(self, channel: str, reason: str | None = None) -> None:
        await self.send(commands.part(channel, reason))

    async def send_privmsg(self, target: str, text: str) -> None:
        await self.send(commands.privmsg(target, text))

    async def quit(self, reason: str | None = None) -> None:
        if self.writer is not None:
            await self.send(commands.quit(reason))

    async def listen(self) -> None:
        return await self.listener.listen()

    async def disconnect(self) -> None:
        self.running = False
        self.connected = False
        if self.writer:
            try:
                self.writer.close()
                await self.writer.wait_closed()
            except OSError as e:
                logger.log_event(
                    "irc",
                    "connect_network_error",
                    level=logging.ERROR,
                    user=self.nick,
                    error=str(e),
                )
            finally:
                self.writer = None
                self.reader = None
        self.dispatcher.reassembler.reset()
        self._set_state(ConnectionState.DISCONNECTED)
        logger.log_event("irc", "disconnected", level=logging.WARNING, user=self.nick)
