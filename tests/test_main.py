from unittest.mock import AsyncMock

import pytest

from gralirc import main as app
from gralirc.config.model import ClientConfig
from gralirc.errors.internal import ConfigError


@pytest.mark.asyncio
async def test_config_error_exits(monkeypatch, events):
    def _fail():
        raise ConfigError("bad port")

    monkeypatch.setattr(app, "get_configuration", _fail)
    with pytest.raises(SystemExit) as exc:
        await app.main()
    assert exc.value.code == 1
    assert ("app", "load_error") in [(d, a) for d, a, _ in events]


@pytest.mark.asyncio
async def test_run_client_stops_when_connect_fails(monkeypatch):
    listen = AsyncMock()
    monkeypatch.setattr(app.IRCClient, "connect", AsyncMock(return_value=False))
    monkeypatch.setattr(app.IRCClient, "listen", listen)
    await app.run_client(ClientConfig())
    listen.assert_not_awaited()


@pytest.mark.asyncio
async def test_run_client_disconnects_after_listen(monkeypatch):
    disconnect = AsyncMock()
    monkeypatch.setattr(app.IRCClient, "connect", AsyncMock(return_value=True))
    monkeypatch.setattr(app.IRCClient, "listen", AsyncMock())
    monkeypatch.setattr(app.IRCClient, "disconnect", disconnect)
    await app.run_client(ClientConfig())
    disconnect.assert_awaited_once()
