from datetime import UTC, datetime

from gralirc.bot.triggers import ChannelTriggers
from gralirc.irc.models import Channel, Identity, is_channel_name, parse_identity
from gralirc.irc.state import SessionState

T1 = datetime(2024, 1, 1, tzinfo=UTC)
T2 = datetime(2024, 6, 1, tzinfo=UTC)


def test_parse_identity_forms():
    assert parse_identity("n!u@h") == Identity("n", "u", "h")
    assert parse_identity("n@h") == Identity("n", host="h")
    assert parse_identity("n") == Identity("n")
    assert parse_identity("") == Identity("")


def test_empty_nick_never_matches():
    assert not Identity("").same_nick("")


def test_is_channel_name():
    assert is_channel_name("#x")
    assert is_channel_name("&local")
    assert not is_channel_name("nick")
    assert not is_channel_name("")


def test_ensure_channel_is_idempotent():
    state = SessionState()
    first, created = state.ensure_channel("#x")
    again, created_again = state.ensure_channel("#x")
    assert created and not created_again
    assert first is again
    assert list(state.channels) == ["#x"]


def test_remove_member_removes_first_match_only():
    channel = Channel("#x", members=[Identity("a"), Identity("b"), Identity("a")])
    assert channel.remove_member("a") == Identity("a")
    assert channel.nicks == ["b", "a"]
    assert channel.remove_member("zzz") is None


def test_rename_and_remove_across_channels():
    state = SessionState()
    for name in ("#a", "#b", "#c"):
        state.ensure_channel(name)
    state.channels["#a"].add_member(Identity("x"))
    state.channels["#b"].add_member(Identity("x"))
    assert state.rename_member("x", "y") == ["#a", "#b"]
    assert state.remove_member_everywhere("y") == ["#a", "#b"]
    assert all(not c.members for c in state.channels.values())


def test_topic_stamp_precedence():
    channel = Channel("#x")
    channel.report_topic("hello", T2)
    channel.stamp_topic(T1, "op")
    channel.report_topic("hello", T2)
    assert (channel.topic_changed_at, channel.topic_changed_by) == (T1, "op")
    channel.set_topic("hello", T2, "alice")
    assert (channel.topic_changed_at, channel.topic_changed_by) == (T2, "alice")


def test_snapshot_is_independent():
    state = SessionState(me=Identity("me"))
    channel, _ = state.ensure_channel("#x")
    channel.add_member(Identity("a"))
    snap = state.snapshot()
    channel.add_member(Identity("b"))
    state.me.nick = "other"
    assert snap.channels["#x"].nicks == ["a"]
    assert snap.me.nick == "me"
    assert snap.lock is not state.lock


class TestChannelTriggers:
    def test_default_triggers(self):
        channel = Channel("#x", topic="Bots", members=[Identity("a"), Identity("b")])
        triggers = ChannelTriggers()
        assert set(triggers) == {"!topic", "!users"}
        assert triggers.reply_for("!topic", channel) == "Topic: Bots"
        assert triggers.reply_for("!users now", channel) == "Users: a, b"

    def test_non_trigger_and_empty_message(self):
        triggers = ChannelTriggers()
        channel = Channel("#x")
        assert triggers.reply_for("hello !topic", channel) is None
        assert triggers.reply_for("   ", channel) is None

    def test_custom_triggers(self):
        triggers = ChannelTriggers({"!name": lambda c: c.name})
        assert triggers.reply_for("!name", Channel("#x")) == "#x"
        assert len(triggers) == 1
