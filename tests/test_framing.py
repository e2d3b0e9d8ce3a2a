import pytest

from gralirc.errors.internal import EmptyInputError
from gralirc.irc.framing import FrameReassembler

STREAM = b":a PRIVMSG #x :h\xc3\xa9llo\r\nPING :srv\r\n:b JOIN #x\r\nPARTIAL"


def _feed_all(chunks: list[bytes]) -> tuple[list[str], bytes]:
    r = FrameReassembler()
    frames: list[str] = []
    for chunk in chunks:
        frames.extend(r.feed(chunk))
    return frames, r.pending


def test_single_chunk_frames_and_pending():
    r = FrameReassembler()
    assert r.feed(b"A\r\nB\r\nC") == ["A", "B"]
    assert r.pending == b"C"


def test_delimiter_split_across_chunks():
    r = FrameReassembler()
    assert r.feed(b"A\r") == []
    assert r.feed(b"\nB\r\nC") == ["A", "B"]
    assert r.pending == b"C"


@pytest.mark.parametrize("size", [1, 2, 3, 5, 7, 64])
def test_chunking_does_not_change_frames(size):
    expected = _feed_all([STREAM])
    chunks = [STREAM[i : i + size] for i in range(0, len(STREAM), size)]
    assert _feed_all(chunks) == expected
    assert expected[0][0] == ":a PRIVMSG #x :héllo"
    assert expected[1] == b"PARTIAL"


def test_multibyte_character_split_between_chunks():
    r = FrameReassembler()
    assert r.feed(b"caf\xc3") == []
    assert r.feed(b"\xa9\r\n") == ["café"]


def test_empty_chunk_without_pending_raises():
    r = FrameReassembler()
    with pytest.raises(EmptyInputError):
        r.feed(b"")


def test_empty_chunk_with_pending_is_noop():
    r = FrameReassembler()
    r.feed(b"abc")
    assert r.feed(b"") == []
    assert r.pending == b"abc"


def test_empty_frames_are_skipped():
    r = FrameReassembler()
    assert r.feed(b"\r\n\r\nA\r\n") == ["A"]


def test_invalid_utf8_is_replaced():
    r = FrameReassembler()
    assert r.feed(b"bad\xff\r\n") == ["bad�"]


def test_reset_drops_pending():
    r = FrameReassembler()
    r.feed(b"half")
    r.reset()
    assert r.pending == b""
