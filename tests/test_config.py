import json

import pytest
from pydantic import ValidationError

from gralirc.config import ClientConfig, ConfigLoader
from gralirc.constants import AUTOJOIN_CHANNEL, DEFAULT_NICK, DEFAULT_PORT
from gralirc.errors.internal import ConfigError


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig()
        assert config.nick == DEFAULT_NICK
        assert config.port == DEFAULT_PORT
        assert config.autojoin == [AUTOJOIN_CHANNEL]
        assert config.triggers_enabled is True
        assert config.password is None

    def test_autojoin_trimmed_and_deduplicated(self):
        config = ClientConfig(autojoin=[" #a ", "#b", "#a", "", "&c"])
        assert config.autojoin == ["#a", "#b", "&c"]

    def test_autojoin_accepts_single_string(self):
        assert ClientConfig(autojoin="#solo").autojoin == ["#solo"]

    def test_autojoin_rejects_non_channel(self):
        with pytest.raises(ValidationError):
            ClientConfig(autojoin=["lobby"])

    def test_nick_is_stripped_and_rejects_whitespace(self):
        assert ClientConfig(nick="  bot ").nick == "bot"
        with pytest.raises(ValidationError):
            ClientConfig(nick="two words")

    @pytest.mark.parametrize("port", [0, 65536])
    def test_port_range(self, port):
        with pytest.raises(ValidationError):
            ClientConfig(port=port)

    def test_effective_username_falls_back_to_nick(self):
        assert ClientConfig(nick="bot").effective_username == "bot"
        assert ClientConfig(nick="bot", username="b").effective_username == "b"

    def test_to_dict_drops_unset_optionals(self):
        data = ClientConfig(nick="bot").to_dict()
        assert "password" not in data
        assert data["nick"] == "bot"


class TestConfigLoader:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = ConfigLoader(environ={}).load(tmp_path / "absent.conf")
        assert config == ClientConfig()

    def test_reads_json_file(self, tmp_path):
        path = tmp_path / "gral_irc.conf"
        path.write_text(
            json.dumps({"host": "irc.example.org", "port": 6697, "nick": "gral"}),
            encoding="utf-8",
        )
        config = ConfigLoader(environ={}).load(path)
        assert (config.host, config.port, config.nick) == ("irc.example.org", 6697, "gral")

    def test_path_from_environment(self, tmp_path):
        path = tmp_path / "custom.conf"
        path.write_text(json.dumps({"nick": "fromfile"}), encoding="utf-8")
        loader = ConfigLoader(environ={"GRAL_IRC_CONF_FILE": str(path)})
        assert loader.load().nick == "fromfile"

    def test_env_overrides_file(self, tmp_path):
        path = tmp_path / "gral_irc.conf"
        path.write_text(json.dumps({"host": "a", "nick": "filenick"}), encoding="utf-8")
        loader = ConfigLoader(
            environ={
                "GRAL_IRC_HOST": "b",
                "GRAL_IRC_PORT": "7000",
                "GRAL_IRC_NICK": "envnick",
                "GRAL_IRC_PASSWORD": "pw",
            }
        )
        config = loader.load(path)
        assert config.host == "b"
        assert config.port == 7000
        assert config.nick == "envnick"
        assert config.password == "pw"

    def test_invalid_json_raises_config_error(self, tmp_path):
        path = tmp_path / "broken.conf"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigLoader(environ={}).load(path)

    def test_non_object_json_raises_config_error(self, tmp_path):
        path = tmp_path / "list.conf"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigLoader(environ={}).load(path)

    def test_validation_failure_raises_config_error(self, tmp_path):
        path = tmp_path / "bad.conf"
        path.write_text(json.dumps({"port": 70000}), encoding="utf-8")
        with pytest.raises(ConfigError) as exc:
            ConfigLoader(environ={}).load(path)
        assert exc.value.data["path"] == str(path)
        assert exc.value.data["errors"]
