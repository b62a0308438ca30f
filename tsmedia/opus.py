"""Opus access units as carried in MPEG-TS private data streams."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

_PREFIX = 0x3FF
_TRIM_MASK = 0x1FFF


class OpusDecodeError(ValueError):
    """An Opus control header or access unit could not be decoded."""


def _require(buf: bytes, pos: int, count: int) -> None:
    if len(buf) - pos < count:
        raise OpusDecodeError("not enough bits")


@dataclass
class OpusControlHeader:
    """The control header that precedes every Opus packet in a PES payload."""

    payload_size: int = 0
    start_trim_flag: bool = False
    end_trim_flag: bool = False
    control_extension_flag: bool = False
    start_trim: int = 0
    end_trim: int = 0
    control_extension_length: int = 0

    @classmethod
    def decode(cls, buf: bytes) -> Tuple["OpusControlHeader", int]:
        """Decode a header from the start of ``buf``; return it and its size."""
        buf = bytes(buf)
        _require(buf, 0, 2)

        prefix = (buf[0] << 3) | (buf[1] >> 5)
        if prefix != _PREFIX:
            raise OpusDecodeError("invalid prefix")

        start_trim_flag = bool(buf[1] & 0x10)
        end_trim_flag = bool(buf[1] & 0x08)
        control_extension_flag = bool(buf[1] & 0x04)
        pos = 2

        payload_size = 0
        while True:
            _require(buf, pos, 1)
            value = buf[pos]
            pos += 1
            payload_size += value
            if value != 255:
                break

        start_trim = 0
        if start_trim_flag:
            _require(buf, pos, 2)
            start_trim = int.from_bytes(buf[pos:pos + 2], "big") & _TRIM_MASK
            pos += 2

        end_trim = 0
        if end_trim_flag:
            _require(buf, pos, 2)
            end_trim = int.from_bytes(buf[pos:pos + 2], "big") & _TRIM_MASK
            pos += 2

        control_extension_length = 0
        if control_extension_flag:
            _require(buf, pos, 1)
            control_extension_length = buf[pos]
            pos += 1
            _require(buf, pos, control_extension_length)
            pos += control_extension_length

        header = cls(
            payload_size=payload_size,
            start_trim_flag=start_trim_flag,
            end_trim_flag=end_trim_flag,
            control_extension_flag=control_extension_flag,
            start_trim=start_trim,
            end_trim=end_trim,
            control_extension_length=control_extension_length,
        )
        return header, pos

    def encoded_size(self) -> int:
        """Number of bytes that :meth:`encode` produces."""
        size = 2 + self.payload_size // 255 + 1
        if self.start_trim_flag:
            size += 2
        if self.end_trim_flag:
            size += 2
        if self.control_extension_flag:
            size += 1 + (self.control_extension_length & 0xFF)
        return size

    def encode(self) -> bytes:
        """Encode the header; extension bytes are written as zeros."""
        second = 0b111 << 5
        if self.start_trim_flag:
            second |= 1 << 4
        if self.end_trim_flag:
            second |= 1 << 3
        if self.control_extension_flag:
            second |= 1 << 2

        out = bytearray([0x7F, second])
        out += b"\xff" * (self.payload_size // 255)
        out.append(self.payload_size % 255)

        if self.start_trim_flag:
            out += (self.start_trim & 0xFFFF).to_bytes(2, "big")
        if self.end_trim_flag:
            out += (self.end_trim & 0xFFFF).to_bytes(2, "big")
        if self.control_extension_flag:
            length = self.control_extension_length & 0xFF
            out.append(length)
            out += bytes(length)

        return bytes(out)


@dataclass
class OpusAccessUnit:
    """A control header followed by one Opus packet."""

    control_header: OpusControlHeader = field(default_factory=OpusControlHeader)
    packet: bytes = b""

    @classmethod
    def decode(cls, buf: bytes) -> Tuple["OpusAccessUnit", int]:
        """Decode an access unit from the start of ``buf``; return it and its size."""
        buf = bytes(buf)
        try:
            header, n = OpusControlHeader.decode(buf)
        except OpusDecodeError as exc:
            raise OpusDecodeError(f"could not decode control header: {exc}") from exc

        if len(buf) - n < header.payload_size:
            raise OpusDecodeError("buffer is too small")

        packet = buf[n:n + header.payload_size]
        return cls(control_header=header, packet=packet), n + header.payload_size

    def encoded_size(self) -> int:
        """Number of bytes that :meth:`encode` produces."""
        return self.control_header.encoded_size() + self.control_header.payload_size

    def encode(self) -> bytes:
        """Encode the access unit."""
        if self.control_header.payload_size != len(self.packet):
            raise OpusDecodeError("invalid packet")
        return self.control_header.encode() + bytes(self.packet)


def decode_packets(data: bytes) -> List[bytes]:
    """Split a PES payload into the Opus packets it carries."""
    data = bytes(data)
    packets: List[bytes] = []
    pos = 0
    while True:
        au, n = OpusAccessUnit.decode(data[pos:])
        pos += n
        packets.append(au.packet)
        if pos >= len(data):
            return packets


def encode_packets(packets: Iterable[bytes]) -> bytes:
    """Join Opus packets into a PES payload, each behind a control header."""
    return b"".join(
        OpusAccessUnit(OpusControlHeader(payload_size=len(packet)), bytes(packet)).encode()
        for packet in packets
    )