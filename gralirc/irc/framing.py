"""Frame reassembly for the CR LF delimited byte stream."""

from __future__ import annotations

from ..constants import LINE_DELIMITER
from ..errors.internal import EmptyInputError


class FrameReassembler:
    """Turns arbitrarily sized chunks into complete protocol frames.

    The only state is the undelimited tail of the previous chunk. It is
    prefixed onto the next chunk, so a delimiter split across two reads
    (CR at the end of one, LF at the start of the next) is still found.
    Frames are split on bytes before decoding, which keeps multi-byte
    characters intact across chunk boundaries.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self._pending = b""

    @property
    def pending(self) -> bytes:
        """Bytes received after the last delimiter, not yet a frame."""
        return self._pending

    def feed(self, chunk: bytes) -> list[str]:
        """Consume one chunk and return the frames it completes, in order.

        Raises:
            EmptyInputError: ``chunk`` is empty and nothing is pending.
        """
        if not chunk and not self._pending:
            raise EmptyInputError("empty chunk with no pending data")

        *complete, self._pending = (self._pending + chunk).split(LINE_DELIMITER)
        return [
            frame.decode(self.encoding, errors="replace")
            for frame in complete
            if frame
        ]

    def reset(self) -> None:
        self._pending = b""
