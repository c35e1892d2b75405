"""Resumable reply reader over a growing byte buffer."""

from redix.protocol.resp import INCOMPLETE, DecodeResult, decode


class ReplyReader:
    """
    Buffers bytes read from a connection and hands out whole replies.

    Bytes are appended with feed(); get_reply() returns the next reply or
    INCOMPLETE. A partial reply is left in the buffer untouched, so feeding
    the rest and asking again gives the same result as one complete read.
    """

    # Compact once this many consumed bytes sit at the front of the buffer
    COMPACT_THRESHOLD = 64 * 1024

    def __init__(self):
        self._buffer = bytearray()
        self._offset = 0

    def feed(self, data: bytes) -> None:
        self._buffer += data

    def get_reply(self) -> DecodeResult:
        result = decode(self._buffer, self._offset)
        if result is INCOMPLETE:
            self._compact()
            return INCOMPLETE

        reply, self._offset = result
        if self._offset == len(self._buffer) or self._offset >= self.COMPACT_THRESHOLD:
            self._compact()
        return reply

    def pending(self) -> int:
        """Number of buffered bytes not yet consumed by a reply."""
        return len(self._buffer) - self._offset

    def clear(self) -> None:
        self._buffer.clear()
        self._offset = 0

    def _compact(self) -> None:
        if self._offset:
            del self._buffer[:self._offset]
            self._offset = 0
