"""Channel trigger words and the replies they produce."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..irc.models import Channel

TriggerReply = Callable[["Channel"], str]


def topic_reply(channel: Channel) -> str:
    return f"Topic: {channel.topic}"


def users_reply(channel: Channel) -> str:
    return "Users: " + ", ".join(channel.nicks)


DEFAULT_TRIGGERS: dict[str, TriggerReply] = {
    "!topic": topic_reply,
    "!users": users_reply,
}


class ChannelTriggers(Mapping[str, TriggerReply]):
    """Read-only mapping of trigger word -> reply builder.

    The dispatcher consults it for every channel message; pass a different
    mapping to change what the bot answers to.
    """

    def __init__(self, triggers: Mapping[str, TriggerReply] | None = None) -> None:
        self._triggers = dict(DEFAULT_TRIGGERS if triggers is None else triggers)

    def __getitem__(self, word: str) -> TriggerReply:
        return self._triggers[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._triggers)

    def __len__(self) -> int:
        return len(self._triggers)

    def reply_for(self, message: str, channel: Channel) -> str | None:
        """Reply text when the first word of ``message`` is a trigger."""
        words = message.split()
        if not words:
            return None
        responder = self._triggers.get(words[0])
        if responder is None:
            return None
        return responder(channel)


__all__ = ["ChannelTriggers", "DEFAULT_TRIGGERS", "TriggerReply"]
