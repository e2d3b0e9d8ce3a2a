import pytest

from gralirc.irc.codes import (
    COMMANDS,
    REVERSE_COMMANDS,
    command_code,
    command_name,
    is_numeric,
)


@pytest.mark.parametrize(
    ("code", "name"),
    [
        ("001", "RPL_WELCOME"),
        ("221", "RPL_UMODEIS"),
        ("324", "RPL_CHANNELMODEIS"),
        ("331", "RPL_NOTOPIC"),
        ("332", "RPL_TOPIC"),
        ("333", "RPL_TOPICWHOTIME"),
        ("353", "RPL_NAMREPLY"),
        ("366", "RPL_ENDOFNAMES"),
        ("372", "RPL_MOTD"),
        ("375", "RPL_MOTDSTART"),
        ("376", "RPL_ENDOFMOTD"),
        ("422", "ERR_NOMOTD"),
    ],
)
def test_numeric_names(code, name):
    assert command_name(code) == name
    assert command_code(name) == code


def test_verbs_map_to_themselves():
    for verb in ("PING", "PRIVMSG", "JOIN", "NICK", "QUIT"):
        assert command_name(verb) == verb
        assert command_code(verb) == verb


def test_unknown_tokens_pass_through():
    assert command_name("999") == "999"
    assert command_code("RPL_MADE_UP") == "RPL_MADE_UP"


def test_registry_is_bijective():
    assert len(COMMANDS) == len(REVERSE_COMMANDS)
    for code, name in COMMANDS.items():
        assert REVERSE_COMMANDS[name] == code


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        COMMANDS["999"] = "RPL_X"  # type: ignore[index]


def test_is_numeric():
    assert is_numeric("353")
    assert not is_numeric("JOIN")
    assert not is_numeric("12")
