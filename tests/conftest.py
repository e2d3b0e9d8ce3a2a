from datetime import UTC, datetime
from typing import Any

import pytest

from gralirc.irc.dispatcher import IRCDispatcher
from gralirc.irc.models import Identity
from gralirc.irc.state import SessionState
from gralirc.logs.logger import logger

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def events(monkeypatch) -> list[tuple[str, str, dict[str, Any]]]:
    """Capture ``logger.log_event`` calls as (domain, action, kwargs)."""
    seen: list[tuple[str, str, dict[str, Any]]] = []

    def _capture(domain: str, action: str, *args: Any, **kwargs: Any) -> None:  # noqa: ARG001
        seen.append((domain, action, kwargs))

    monkeypatch.setattr(logger, "log_event", _capture)
    return seen


@pytest.fixture
def dispatcher() -> IRCDispatcher:
    state = SessionState(me=Identity("me"))
    return IRCDispatcher(state, autojoin=("#home",), clock=lambda: FIXED_NOW)


@pytest.fixture
def feed(dispatcher: IRCDispatcher):
    """Push whole lines through the pipeline; return the outbound lines."""

    def _feed(*lines: str) -> list[str]:
        data = "".join(f"{line}\r\n" for line in lines).encode()
        return [cmd.line() for cmd in dispatcher.process_incoming_data(data)]

    return _feed
