"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto

from ..constants import CHANNEL_PREFIXES


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    REGISTERING = auto()
    READY = auto()


@dataclass(slots=True)
class Identity:
    """A protocol participant. Roster operations compare ``nick`` only."""

    nick: str
    user: str = ""
    host: str = ""

    def same_nick(self, nick: str) -> bool:
        return bool(nick) and self.nick == nick


def parse_identity(prefix: str) -> Identity:
    """Split ``nick!user@host``, ``nick@host`` or a bare ``nick``."""
    if "!" in prefix:
        nick, rest = prefix.split("!", 1)
        if "@" in rest:
            user, host = rest.split("@", 1)
            return Identity(nick, user, host)
        return Identity(nick)
    if "@" in prefix:
        nick, host = prefix.split("@", 1)
        return Identity(nick, host=host)
    return Identity(prefix)


def is_channel_name(name: str) -> bool:
    return bool(name) and name[0] in CHANNEL_PREFIXES


@dataclass
class Channel:
    """Client-side view of one channel.

    ``reset_members`` is armed by JOIN and by end-of-names: the next names
    reply clears the roster before appending.
    """

    name: str
    modes: str = ""
    topic: str = ""
    topic_changed_at: datetime | None = None
    topic_changed_by: str = ""
    messages: list[str] = field(default_factory=list)
    members: list[Identity] = field(default_factory=list)
    joined: bool = False
    reset_members: bool = False
    topic_time_authoritative: bool = field(default=False, repr=False)

    @property
    def nicks(self) -> list[str]:
        return [member.nick for member in self.members]

    def add_message(self, raw: str) -> None:
        self.messages.append(raw)

    def add_member(self, identity: Identity) -> None:
        self.members.append(identity)

    def remove_member(self, nick: str) -> Identity | None:
        """Remove the first roster entry with ``nick``; return it if found."""
        for index, member in enumerate(self.members):
            if member.same_nick(nick):
                return self.members.pop(index)
        return None

    def rename_member(self, old: str, new: str) -> int:
        renamed = 0
        for member in self.members:
            if member.same_nick(old):
                member.nick = new
                renamed += 1
        return renamed

    def set_topic(self, text: str, changed_at: datetime, changed_by: str = "") -> None:
        """Apply a topic change observed now."""
        self.topic = text
        self.topic_changed_at = changed_at
        self.topic_changed_by = changed_by
        self.topic_time_authoritative = False

    def report_topic(self, text: str, observed_at: datetime) -> None:
        """Apply a topic reply; an authoritative stamp for the same text wins."""
        if self.topic_time_authoritative and text == self.topic:
            return
        self.set_topic(text, observed_at)

    def stamp_topic(self, changed_at: datetime, changed_by: str) -> None:
        """Record the server-supplied change time and setter."""
        self.topic_changed_at = changed_at
        self.topic_changed_by = changed_by
        self.topic_time_authoritative = True


__all__ = [
    "Channel",
    "ConnectionState",
    "Identity",
    "is_channel_name",
    "parse_identity",
]
