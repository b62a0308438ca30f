"""Byte readers used around the MPEG-TS demuxer."""

from __future__ import annotations

from typing import BinaryIO, Optional

PACKET_SIZE = 188
READ_SIZE = 1500
RECORD_LIMIT = 1 * 1024 * 1024


class PacketSizeError(ValueError):
    """A read returned a chunk that is not a whole number of TS packets."""


class RecordLimitError(BufferError):
    """A RecordReader would keep more than its limit."""


def _normalize(size: Optional[int]) -> int:
    return -1 if size is None else size


class BufferedReader:
    """Reader that pulls whole chunks of TS packets from a source."""

    def __init__(self, source: BinaryIO) -> None:
        self._source = source
        self._buf = b""
        self._pos = 0

    def read(self, size: Optional[int] = -1) -> bytes:
        """Return up to ``size`` bytes; ``b""`` at end of stream."""
        size = _normalize(size)
        if self._pos >= len(self._buf):
            chunk = self._source.read(READ_SIZE)
            if not chunk:
                return b""
            if len(chunk) % PACKET_SIZE:
                raise PacketSizeError(
                    f"received packet with size {len(chunk)} not multiple of {PACKET_SIZE}"
                )
            self._buf = bytes(chunk)
            self._pos = 0
        end = len(self._buf) if size < 0 else min(self._pos + size, len(self._buf))
        out = self._buf[self._pos:end]
        self._pos = end
        return out


class PlaybackReader:
    """Reader that first replays previously recorded bytes, then the source."""

    def __init__(self, source: BinaryIO, recorded: bytes = b"") -> None:
        self._source = source
        self._pending = bytes(recorded)

    def read(self, size: Optional[int] = -1) -> bytes:
        """Return up to ``size`` bytes, replayed bytes first."""
        size = _normalize(size)
        if self._pending:
            if size < 0 or size >= len(self._pending):
                out, self._pending = self._pending, b""
            else:
                out, self._pending = self._pending[:size], self._pending[size:]
            return out
        return self._source.read(size)


class RecordReader:
    """Reader that keeps a copy of everything read through it."""

    def __init__(self, source: BinaryIO, limit: int = RECORD_LIMIT) -> None:
        self._source = source
        self._limit = limit
        self._recorded = bytearray()

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read from the source and record the result."""
        data = self._source.read(_normalize(size))
        if len(self._recorded) + len(data) > self._limit:
            raise RecordLimitError("max buffer size exceeded")
        self._recorded += data
        return data

    def recorded(self) -> bytes:
        """Everything read so far."""
        return bytes(self._recorded)