"""IRC message parsing utilities."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors.internal import EmptyInputError, MalformedFrameError
from .codes import command_name
from .commands import build_line
from .models import parse_identity

# Commands whose first positional argument names a channel or user.
TARGETED_COMMANDS = frozenset(
    {"PRIVMSG", "NOTICE", "JOIN", "PART", "MODE", "TOPIC", "INVITE", "KICK"}
)


@dataclass(frozen=True)
class IRCMessage:
    raw: str
    command: str
    tags: dict[str, str] = field(default_factory=dict)
    prefix: str = ""
    nick: str = ""
    user: str = ""
    host: str = ""
    target: str = ""
    args: tuple[str, ...] = ()
    trailing: str | None = None

    @property
    def command_name(self) -> str:
        return command_name(self.command)

    @property
    def params(self) -> tuple[str, ...]:
        """Positional arguments without the trailing one."""
        if self.trailing is None:
            return self.args
        return self.args[:-1]

    def arg(self, index: int, default: str = "") -> str:
        try:
            return self.args[index]
        except IndexError:
            return default

    def to_line(self) -> str:
        parts: list[str] = []
        if self.tags:
            parts.append(
                "@"
                + ";".join(k if v == "" else f"{k}={v}" for k, v in self.tags.items())
            )
        if self.prefix:
            parts.append(f":{self.prefix}")
        parts.append(build_line(self.command, *self.params, trailing=self.trailing))
        return " ".join(parts)


def parse_irc_message(raw_line: str) -> IRCMessage:
    """Decode one frame.

    Raises:
        EmptyInputError: ``raw_line`` is empty.
        MalformedFrameError: no command token could be found.
    """
    if not raw_line:
        raise EmptyInputError("empty frame")

    line = raw_line.rstrip("\r\n")
    tags: dict[str, str] = {}
    prefix = ""

    if line.startswith("@"):
        tags_part, _, line = line.partition(" ")
        tags = _parse_tags(tags_part[1:])

    if line.startswith(":"):
        # A prefix without a following space leaves nothing to parse
        prefix, _, line = line[1:].partition(" ")

    head, sep, trailing_part = line.partition(" :")
    trailing = trailing_part if sep else None

    fields = head.split()
    if not fields:
        raise MalformedFrameError("no command found", data={"raw": raw_line})

    command = fields[0].upper()
    args = fields[1:]
    if trailing is not None:
        args.append(trailing)
    target = args[0] if command in TARGETED_COMMANDS and args else ""

    identity = parse_identity(prefix)
    return IRCMessage(
        raw=raw_line,
        command=command,
        tags=tags,
        prefix=prefix,
        nick=identity.nick,
        user=identity.user,
        host=identity.host,
        target=target,
        args=tuple(args),
        trailing=trailing,
    )


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if not tag:
            continue
        k, _, v = tag.partition("=")
        tags[k] = v
    return tags


@dataclass
class PrivMsg:
    author: str
    target: str
    message: str
    tags: dict[str, str]


def build_privmsg(parsed: IRCMessage) -> PrivMsg | None:
    if parsed.command != "PRIVMSG" or not parsed.target:
        return None
    if len(parsed.args) < 2:
        return None
    message = (
        parsed.trailing if parsed.trailing is not None else " ".join(parsed.args[1:])
    )
    return PrivMsg(
        author=parsed.nick or "?",
        target=parsed.target,
        message=message,
        tags=parsed.tags,
    )
