import pytest

from gralirc.irc import commands


@pytest.mark.parametrize(
    ("command", "line"),
    [
        (commands.pong("srv"), "PONG :srv"),
        (commands.join("#x"), "JOIN #x"),
        (commands.part("#x"), "PART #x"),
        (commands.part("#x", "see you"), "PART #x :see you"),
        (commands.privmsg("#x", "hi there"), "PRIVMSG #x :hi there"),
        (commands.nick("bot"), "NICK bot"),
        (commands.user("bot", "Real Name"), "USER bot 0 * :Real Name"),
        (commands.password("pw"), "PASS pw"),
        (commands.quit(), "QUIT"),
        (commands.kick("#x", "bob", "spam"), "KICK #x bob :spam"),
        (commands.mode("#x", "+o", "alice"), "MODE #x +o alice"),
    ],
)
def test_command_lines(command, line):
    assert command.line() == line


def test_empty_trailing_is_kept():
    assert commands.privmsg("#x", "").line() == "PRIVMSG #x :"


def test_commands_are_immutable():
    cmd = commands.join("#x")
    with pytest.raises(AttributeError):
        cmd.verb = "PART"  # type: ignore[misc]
