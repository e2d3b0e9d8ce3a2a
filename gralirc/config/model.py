from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..constants import (
    AUTOJOIN_CHANNEL,
    CHANNEL_PREFIXES,
    DEFAULT_HOST,
    DEFAULT_NICK,
    DEFAULT_PORT,
    DEFAULT_REALNAME,
)


class ClientConfig(BaseModel):
    """Connection and identity settings for one client.

    Attributes:
        host: IRC server host name.
        port: IRC server TCP port.
        nick: Nickname requested at registration.
        username: USER name; defaults to the nick.
        realname: Real name sent with USER.
        password: Optional server password (PASS is skipped when empty).
        autojoin: Channels joined once the welcome banner ends.
        triggers_enabled: Whether channel trigger words get replies.
    """

    host: str = Field(default=DEFAULT_HOST, min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    nick: str = Field(default=DEFAULT_NICK, min_length=1)
    username: str | None = None
    realname: str = DEFAULT_REALNAME
    password: str | None = None
    autojoin: list[str] = Field(default_factory=lambda: [AUTOJOIN_CHANNEL])
    triggers_enabled: bool = True

    @field_validator("nick", "host", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("nick")
    @classmethod
    def validate_nick(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("nick must not contain whitespace")
        return v

    @field_validator("autojoin", mode="before")
    @classmethod
    def validate_autojoin(cls, v: Any) -> list[str]:
        """Trim and deduplicate channel names, keeping their order and case.

        Channel names are case-sensitive here, so no lowercasing happens.
        """
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, list):
            raise ValueError("autojoin must be a list")
        validated: list[str] = []
        for c in v:
            if not isinstance(c, str):
                continue
            stripped = c.strip()
            if not stripped:
                continue
            if stripped[0] not in CHANNEL_PREFIXES:
                raise ValueError(f"not a channel name: {stripped}")
            validated.append(stripped)
        return list(dict.fromkeys(validated))

    @property
    def effective_username(self) -> str:
        return self.username or self.nick

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
