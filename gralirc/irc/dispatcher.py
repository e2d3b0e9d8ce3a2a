"""Message dispatch: applies decoded messages to the session state.

Every handler takes one :class:`IRCMessage`, mutates the session state and
returns the outbound commands the message calls for. Writing them is left to
the listener, so handlers can be exercised without a transport.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from types import MappingProxyType

from ..bot.triggers import ChannelTriggers, TriggerReply
from ..constants import AUTOJOIN_CHANNEL, NICK_PREFIX_SIGILS
from ..errors.internal import (
    EmptyInputError,
    HandlingError,
    MessageHandlingError,
    ProtocolError,
    UnknownCommandError,
)
from ..logs.logger import logger
from . import commands
from .commands import OutboundCommand
from .framing import FrameReassembler
from .models import Channel, Identity, is_channel_name, parse_identity
from .parser import IRCMessage, build_privmsg, parse_irc_message
from .state import SessionState

Handler = Callable[[IRCMessage], list[OutboundCommand]]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _require(msg: IRCMessage, count: int) -> None:
    if len(msg.args) < count:
        raise MessageHandlingError(
            f"{msg.command_name} needs {count} parameters, got {len(msg.args)}",
            data={"raw": msg.raw},
        )


class IRCDispatcher:
    """Routes messages to handlers through a table fixed at construction."""

    def __init__(
        self,
        state: SessionState | None = None,
        *,
        autojoin: Sequence[str] = (AUTOJOIN_CHANNEL,),
        triggers: Mapping[str, TriggerReply] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.state = state if state is not None else SessionState()
        self.autojoin = tuple(autojoin)
        if isinstance(triggers, ChannelTriggers):
            self.triggers = triggers
        else:
            self.triggers = ChannelTriggers(triggers)
        self.clock = clock
        self.registered = False
        self.reassembler = FrameReassembler()
        self.handlers: Mapping[str, Handler] = MappingProxyType(
            {
                "RPL_WELCOME": self._on_welcome,
                "PING": self._on_ping,
                "RPL_MOTDSTART": self._on_motd_start,
                "RPL_MOTD": self._on_motd,
                "RPL_ENDOFMOTD": self._on_end_of_motd,
                "ERR_NOMOTD": self._on_end_of_motd,
                "RPL_UMODEIS": self._on_umode_is,
                "JOIN": self._on_join,
                "RPL_NAMREPLY": self._on_names_reply,
                "RPL_ENDOFNAMES": self._on_end_of_names,
                "PRIVMSG": self._on_privmsg,
                "NOTICE": self._on_notice,
                "RPL_TOPIC": self._on_topic_reply,
                "TOPIC": self._on_topic_change,
                "RPL_NOTOPIC": self._on_no_topic,
                "RPL_TOPICWHOTIME": self._on_topic_who_time,
                "PART": self._on_part,
                "KICK": self._on_kick,
                "QUIT": self._on_quit,
                "NICK": self._on_nick,
                "MODE": self._on_mode,
                "RPL_CHANNELMODEIS": self._on_channel_mode_is,
                "ERROR": self._on_error,
            }
        )

    # Pipeline -----------------------------------------------------------

    def process_incoming_data(self, chunk: bytes) -> list[OutboundCommand]:
        """Reassemble, decode and handle one chunk from the transport.

        Failures are contained to the frame that caused them; the remaining
        frames of the chunk are still processed.
        """
        try:
            frames = self.reassembler.feed(chunk)
        except EmptyInputError:
            logger.log_event(
                "irc", "empty_input", level=logging.DEBUG, user=self.state.me.nick
            )
            return []
        outbound: list[OutboundCommand] = []
        for frame in frames:
            outbound.extend(self.process_frame(frame))
        return outbound

    def process_frame(self, frame: str) -> list[OutboundCommand]:
        logger.log_event(
            "irc", "raw", level=logging.DEBUG, user=self.state.me.nick, raw=frame
        )
        try:
            msg = parse_irc_message(frame)
        except ProtocolError as e:
            logger.log_event(
                "irc",
                "malformed_frame",
                level=logging.WARNING,
                user=self.state.me.nick,
                raw=frame,
                error=str(e),
            )
            return []
        try:
            return self.handle(msg)
        except UnknownCommandError as e:
            logger.log_event(
                "irc",
                "unknown_command",
                level=logging.DEBUG,
                user=self.state.me.nick,
                command=e.command,
            )
        except HandlingError as e:
            logger.log_event(
                "irc",
                "handler_error",
                level=logging.ERROR,
                user=self.state.me.nick,
                command=msg.command_name,
                error=str(e),
                error_type=type(e).__name__,
            )
        return []

    def handle(self, msg: IRCMessage) -> list[OutboundCommand]:
        """Apply ``msg`` to the session state.

        Raises:
            UnknownCommandError: no handler for the message's command name.
            MessageHandlingError: the handler rejected the message.
        """
        handler = self.handlers.get(msg.command_name)
        if handler is None:
            raise UnknownCommandError(msg.command_name, data={"raw": msg.raw})
        with self.state.lock:
            return handler(msg)

    # Helpers ------------------------------------------------------------

    def _channel_for_reply(self, name: str) -> Channel:
        """Channel referenced by a server reply, created if unknown."""
        channel, created = self.state.ensure_channel(name)
        if created:
            self._report_missing_channel(name)
        return channel

    def _report_missing_channel(self, name: str) -> None:
        logger.log_event(
            "irc",
            "channel_not_found",
            level=logging.WARNING,
            user=self.state.me.nick,
            channel=name,
        )

    # Registration and banner ---------------------------------------------

    def _on_welcome(self, msg: IRCMessage) -> list[OutboundCommand]:
        nick = msg.arg(0)
        if nick:
            self.state.me.nick = nick
        self.registered = True
        logger.log_event("irc", "welcome", user=nick, server=msg.prefix)
        return []

    def _on_ping(self, msg: IRCMessage) -> list[OutboundCommand]:
        return [commands.pong(msg.arg(0))]

    def _on_motd_start(self, msg: IRCMessage) -> list[OutboundCommand]:
        self.state.motd.clear()
        return []

    def _on_motd(self, msg: IRCMessage) -> list[OutboundCommand]:
        if msg.trailing is not None:
            line = msg.trailing
        else:
            line = " ".join(msg.args[1:])
        self.state.motd.append(line)
        return []

    def _on_end_of_motd(self, msg: IRCMessage) -> list[OutboundCommand]:
        logger.log_event(
            "irc",
            "motd_complete",
            level=logging.DEBUG,
            user=self.state.me.nick,
            lines=len(self.state.motd),
        )
        return [commands.join(name) for name in self.autojoin]

    def _on_umode_is(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 2)
        self.state.me = Identity(msg.args[0])
        self.state.user_modes = msg.args[1]
        logger.log_event(
            "irc",
            "identity_confirmed",
            user=self.state.me.nick,
            modes=self.state.user_modes,
        )
        return []

    # Membership ---------------------------------------------------------

    def _on_join(self, msg: IRCMessage) -> list[OutboundCommand]:
        if not msg.target or not msg.nick:
            raise MessageHandlingError("JOIN without channel or nick", data={"raw": msg.raw})
        is_me = self.state.is_me(msg.nick)
        channel, created = self.state.ensure_channel(msg.target)
        if created and not is_me:
            self._report_missing_channel(msg.target)
        channel.add_member(Identity(msg.nick, msg.user, msg.host))
        channel.reset_members = True
        if is_me:
            channel.joined = True
            logger.log_event(
                "irc", "joined_channel", user=msg.nick, channel=msg.target
            )
        return []

    def _on_names_reply(self, msg: IRCMessage) -> list[OutboundCommand]:
        if msg.trailing is not None:
            head, names = msg.params, msg.trailing
        else:
            head, names = msg.args[:-1], msg.arg(-1)
        if len(head) < 2:
            raise MessageHandlingError("names reply without channel", data={"raw": msg.raw})
        channel = self._channel_for_reply(head[-1])
        if channel.reset_members:
            channel.members.clear()
            channel.reset_members = False
        for entry in names.split():
            name = entry.lstrip(NICK_PREFIX_SIGILS)
            if name:
                channel.add_member(parse_identity(name))
        return []

    def _on_end_of_names(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 2)
        channel = self._channel_for_reply(msg.args[1])
        channel.reset_members = True
        logger.log_event(
            "irc",
            "names_synced",
            level=logging.DEBUG,
            user=self.state.me.nick,
            channel=channel.name,
            members=len(channel.members),
        )
        return []

    def _leave(self, channel: Channel, nick: str, action: str) -> None:
        if channel.remove_member(nick) is None:
            logger.log_event(
                "irc",
                "member_not_found",
                level=logging.DEBUG,
                user=self.state.me.nick,
                channel=channel.name,
                nick=nick,
            )
        if self.state.is_me(nick):
            self.state.remove_channel(channel.name)
            logger.log_event("irc", action, user=nick, channel=channel.name)

    def _on_part(self, msg: IRCMessage) -> list[OutboundCommand]:
        if not msg.target or not msg.nick:
            raise MessageHandlingError("PART without channel or nick", data={"raw": msg.raw})
        channel = self.state.get_channel(msg.target)
        if channel is None:
            self._report_missing_channel(msg.target)
            return []
        self._leave(channel, msg.nick, "left_channel")
        return []

    def _on_kick(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 2)
        channel = self.state.get_channel(msg.target)
        if channel is None:
            self._report_missing_channel(msg.target)
            return []
        self._leave(channel, msg.args[1], "kicked_from_channel")
        return []

    def _on_quit(self, msg: IRCMessage) -> list[OutboundCommand]:
        if not msg.nick:
            raise MessageHandlingError("QUIT without prefix", data={"raw": msg.raw})
        affected = self.state.remove_member_everywhere(msg.nick)
        logger.log_event(
            "irc",
            "user_quit",
            level=logging.DEBUG,
            user=self.state.me.nick,
            nick=msg.nick,
            channels=",".join(affected),
        )
        return []

    def _on_nick(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 1)
        if not msg.nick:
            raise MessageHandlingError("NICK without prefix", data={"raw": msg.raw})
        old, new = msg.nick, msg.args[0]
        self.state.rename_member(old, new)
        if self.state.is_me(old):
            self.state.me.nick = new
            logger.log_event("irc", "own_nick_changed", user=new, old_nick=old)
        return []

    # Channel attributes -------------------------------------------------

    def _on_mode(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 2)
        modes = " ".join(msg.args[1:])
        if is_channel_name(msg.target):
            channel = self.state.get_channel(msg.target)
            if channel is None:
                self._report_missing_channel(msg.target)
                return []
            channel.modes = modes
        elif self.state.is_me(msg.target):
            self.state.user_modes = modes
        return []

    def _on_channel_mode_is(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 3)
        channel = self._channel_for_reply(msg.args[1])
        channel.modes = " ".join(msg.args[2:])
        return []

    def _on_topic_reply(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 3)
        channel = self._channel_for_reply(msg.args[1])
        channel.report_topic(msg.args[-1], self.clock())
        return []

    def _on_topic_change(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 1)
        channel = self._channel_for_reply(msg.target)
        channel.set_topic(msg.arg(1), self.clock(), msg.nick)
        logger.log_event(
            "irc",
            "topic_changed",
            user=self.state.me.nick,
            channel=channel.name,
            changed_by=msg.nick,
            topic=channel.topic,
        )
        return []

    def _on_no_topic(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 2)
        channel = self._channel_for_reply(msg.args[1])
        channel.set_topic("", self.clock())
        return []

    def _on_topic_who_time(self, msg: IRCMessage) -> list[OutboundCommand]:
        _require(msg, 4)
        try:
            changed_at = datetime.fromtimestamp(int(msg.args[3]), tz=UTC)
        except (ValueError, OverflowError, OSError) as e:
            raise MessageHandlingError(
                f"invalid topic timestamp: {msg.args[3]}", data={"raw": msg.raw}
            ) from e
        channel = self._channel_for_reply(msg.args[1])
        channel.stamp_topic(changed_at, parse_identity(msg.args[2]).nick)
        return []

    # Chat ---------------------------------------------------------------

    def _on_privmsg(self, msg: IRCMessage) -> list[OutboundCommand]:
        priv = build_privmsg(msg)
        if priv is None:
            raise MessageHandlingError("PRIVMSG without target or text", data={"raw": msg.raw})
        if not is_channel_name(priv.target):
            logger.log_event(
                "irc",
                "private_message",
                level=logging.DEBUG,
                user=self.state.me.nick,
                author=priv.author,
            )
            return []
        channel = self.state.get_channel(priv.target)
        if channel is None:
            self._report_missing_channel(priv.target)
            return []
        channel.add_message(msg.raw)
        logger.log_event(
            "chat",
            "privmsg",
            user=priv.author,
            channel=priv.target,
            chat_message=priv.message,
        )
        reply = self.triggers.reply_for(priv.message, channel)
        if reply is None:
            return []
        return [commands.privmsg(priv.target, reply)]

    def _on_notice(self, msg: IRCMessage) -> list[OutboundCommand]:
        logger.log_event(
            "irc",
            "notice",
            level=logging.DEBUG,
            user=msg.nick or msg.prefix,
            target=msg.target,
            text=msg.arg(-1),
        )
        return []

    def _on_error(self, msg: IRCMessage) -> list[OutboundCommand]:
        logger.log_event(
            "irc",
            "server_error",
            level=logging.ERROR,
            user=self.state.me.nick,
            error=msg.arg(-1),
        )
        return []
