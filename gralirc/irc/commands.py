"""Outbound command construction.

Formatting only: ``VERB p1 p2 :trailing``. The line delimiter is added by the
client when the command is written.
"""

from __future__ import annotations

from dataclasses import dataclass


def build_line(verb: str, *params: str, trailing: str | None = None) -> str:
    parts = [verb, *params]
    if trailing is not None:
        parts.append(f":{trailing}")
    return " ".join(parts)


@dataclass(frozen=True, slots=True)
class OutboundCommand:
    verb: str
    params: tuple[str, ...] = ()
    trailing: str | None = None

    def line(self) -> str:
        return build_line(self.verb, *self.params, trailing=self.trailing)


def pong(token: str) -> OutboundCommand:
    return OutboundCommand("PONG", trailing=token)


def join(channel: str) -> OutboundCommand:
    return OutboundCommand("JOIN", (channel,))


def part(channel: str, reason: str | None = None) -> OutboundCommand:
    return OutboundCommand("PART", (channel,), reason)


def privmsg(target: str, text: str) -> OutboundCommand:
    return OutboundCommand("PRIVMSG", (target,), text)


def nick(name: str) -> OutboundCommand:
    return OutboundCommand("NICK", (name,))


def user(username: str, realname: str) -> OutboundCommand:
    return OutboundCommand("USER", (username, "0", "*"), realname)


def password(secret: str) -> OutboundCommand:
    return OutboundCommand("PASS", (secret,))


def quit(reason: str | None = None) -> OutboundCommand:  # noqa: A001
    return OutboundCommand("QUIT", (), reason)


def kick(channel: str, target: str, reason: str | None = None) -> OutboundCommand:
    return OutboundCommand("KICK", (channel, target), reason)


def mode(target: str, modes: str, *args: str) -> OutboundCommand:
    return OutboundCommand("MODE", (target, modes, *args))


__all__ = [
    "OutboundCommand",
    "build_line",
    "join",
    "kick",
    "mode",
    "nick",
    "part",
    "password",
    "pong",
    "privmsg",
    "quit",
    "user",
]
