"""Client-visible session state: own identity and joined channels."""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field

from ..errors.internal import MissingStateError
from .models import Channel, Identity


@dataclass
class SessionState:
    """Mutable model updated only through the dispatcher.

    ``lock`` is the single mutual-exclusion boundary around handle-and-mutate.
    Readers on other threads (a UI, for example) should take it or use
    :meth:`snapshot`.
    """

    me: Identity = field(default_factory=lambda: Identity(""))
    user_modes: str = ""
    motd: list[str] = field(default_factory=list)
    channels: dict[str, Channel] = field(default_factory=dict)
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def is_me(self, nick: str) -> bool:
        return self.me.same_nick(nick)

    def ensure_channel(self, name: str) -> tuple[Channel, bool]:
        """Return the channel named ``name``, creating it if absent.

        Idempotent. The second element tells whether the channel was created.
        """
        channel = self.channels.get(name)
        if channel is not None:
            return channel, False
        channel = Channel(name)
        self.channels[name] = channel
        return channel, True

    def get_channel(self, name: str) -> Channel | None:
        return self.channels.get(name)

    def require_channel(self, name: str) -> Channel:
        channel = self.channels.get(name)
        if channel is None:
            raise MissingStateError(
                f"channel not found: {name}", data={"channel": name}
            )
        return channel

    def remove_channel(self, name: str) -> Channel | None:
        return self.channels.pop(name, None)

    def remove_member_everywhere(self, nick: str) -> list[str]:
        """Drop ``nick`` from every roster; return the affected channel names."""
        return [
            name
            for name, channel in self.channels.items()
            if channel.remove_member(nick) is not None
        ]

    def rename_member(self, old: str, new: str) -> list[str]:
        return [
            name
            for name, channel in self.channels.items()
            if channel.rename_member(old, new)
        ]

    def snapshot(self) -> SessionState:
        """Deep copy of the state taken under the lock."""
        with self.lock:
            return SessionState(
                me=copy.deepcopy(self.me),
                user_modes=self.user_modes,
                motd=list(self.motd),
                channels=copy.deepcopy(self.channels),
            )


__all__ = ["SessionState"]
