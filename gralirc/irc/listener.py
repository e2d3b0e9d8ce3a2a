"""Read loop: feeds transport chunks to the dispatcher and writes the replies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import READ_CHUNK_SIZE
from ..errors.handling import log_error
from ..errors.internal import TransportError
from ..logs.logger import logger
from .models import ConnectionState

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


class IRCListener:
    """Owns the read loop and delegates decoding and handling to the dispatcher."""

    def __init__(self, client: IRCClient):
        self.client = client

    async def listen(self) -> None:
        if not self._can_start_listening():
            return
        self._initialize_listening()
        try:
            while self.client.running and self.client.connected:
                should_break = await self._process_read_cycle()
                if should_break:
                    break
        finally:
            self._finalize_listening()

    def _can_start_listening(self) -> bool:
        if not self.client.connected or not self.client.reader:
            logger.log_event(
                "irc",
                "listen_start_failed",
                level=logging.ERROR,
                user=self.client.nick,
            )
            return False
        return True

    def _initialize_listening(self) -> None:
        logger.log_event("irc", "listener_start", user=self.client.nick)
        self.client.running = True

    async def _process_read_cycle(self) -> bool:
        try:
            return await self._handle_data_read()
        except TransportError as e:
            log_error("Transport failure", e, {"user": self.client.nick})
            logger.log_event(
                "irc",
                "connection_lost",
                level=logging.ERROR,
                user=self.client.nick,
                error=str(e),
            )
            self.client.connected = False
            return True

    async def _read_chunk(self) -> bytes:
        reader = self.client.reader
        if reader is None:
            raise TransportError("no reader")
        try:
            data = await reader.read(READ_CHUNK_SIZE)
        except OSError as e:
            raise TransportError(f"read failed: {e}") from e
        if not data:
            raise TransportError("end of stream")
        return data

    async def _handle_data_read(self) -> bool:
        data = await self._read_chunk()
        outbound = self.client.dispatcher.process_incoming_data(data)
        if (
            self.client.dispatcher.registered
            and self.client.connection_state is ConnectionState.REGISTERING
        ):
            self.client._set_state(ConnectionState.READY)  # pylint: disable=protected-access
        for command in outbound:
            await self.client.send(command)
        return False

    def _finalize_listening(self) -> None:
        self.client.running = False
        logger.log_event(
            "irc", "listener_stopped", level=logging.WARNING, user=self.client.nick
        )
        if not self.client.writer or not self.client.reader:
            self.client.connected = False
