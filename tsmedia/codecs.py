"""Codec descriptions as they appear in an MPEG-TS program map table."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import ClassVar, Tuple, Union

OPUS_IDENTIFIER = int.from_bytes(b"Opus", "big")
OPUS_EXTENSION_TAG = 0x80


class StreamType(enum.IntEnum):
    """Stream types used in PMT elementary stream entries."""

    MPEG1_VIDEO = 0x01
    MPEG2_VIDEO = 0x02
    MPEG1_AUDIO = 0x03
    MPEG2_AUDIO = 0x04
    PRIVATE_DATA = 0x06
    AAC_AUDIO = 0x0F
    MPEG4_VIDEO = 0x10
    H264_VIDEO = 0x1B
    H265_VIDEO = 0x24
    AC3_AUDIO = 0x81


@dataclass(frozen=True)
class RegistrationDescriptor:
    """Registration descriptor carrying a four-character format identifier."""

    format_identifier: int
    tag: ClassVar[int] = 0x05


@dataclass(frozen=True)
class ExtensionDescriptor:
    """Extension descriptor with its own extension tag and raw payload."""

    extension_tag: int
    data: bytes = b""
    tag: ClassVar[int] = 0x7F


Descriptor = Union[RegistrationDescriptor, ExtensionDescriptor]


@dataclass(frozen=True)
class ElementaryStream:
    """One elementary stream entry of a program map table."""

    pid: int
    stream_type: int
    descriptors: Tuple[Descriptor, ...] = ()


class Codec(abc.ABC):
    """A codec that can be carried in an MPEG-TS stream."""

    @abc.abstractmethod
    def is_video(self) -> bool:
        """Whether the codec carries video."""

    @abc.abstractmethod
    def marshal(self, pid: int) -> ElementaryStream:
        """Describe the codec as a PMT entry for the given PID."""


@dataclass(frozen=True)
class CodecAC3(Codec):
    """AC-3 audio."""

    sample_rate: int
    channel_count: int

    def is_video(self) -> bool:
        return True

    def marshal(self, pid: int) -> ElementaryStream:
        return ElementaryStream(pid, StreamType.AC3_AUDIO)


@dataclass(frozen=True)
class CodecH264(Codec):
    """H.264 video."""

    def is_video(self) -> bool:
        return True

    def marshal(self, pid: int) -> ElementaryStream:
        return ElementaryStream(pid, StreamType.H264_VIDEO)


@dataclass(frozen=True)
class CodecH265(Codec):
    """H.265 video."""

    def is_video(self) -> bool:
        return True

    def marshal(self, pid: int) -> ElementaryStream:
        return ElementaryStream(pid, StreamType.H265_VIDEO)


@dataclass(frozen=True)
class CodecMPEG1Audio(Codec):
    """MPEG-1 audio."""

    def is_video(self) -> bool:
        return True

    def marshal(self, pid: int) -> ElementaryStream:
        return ElementaryStream(pid, StreamType.MPEG1_AUDIO)


@dataclass(frozen=True)
class CodecMPEG1Video(Codec):
    """MPEG-1 or MPEG-2 video."""

    def is_video(self) -> bool:
        return True

    def marshal(self, pid: int) -> ElementaryStream:
        # MPEG-2 tells readers the video may be either MPEG-1 or MPEG-2.
        return ElementaryStream(pid, StreamType.MPEG2_VIDEO)


@dataclass(frozen=True)
class CodecMPEG4Audio(Codec):
    """MPEG-4 audio with its decoder configuration."""

    object_type: int
    sample_rate: int
    channel_count: int

    def is_video(self) -> bool:
        return False

    def marshal(self, pid: int) -> ElementaryStream:
        return ElementaryStream(pid, StreamType.AAC_AUDIO)


@dataclass(frozen=True)
class CodecMPEG4Video(Codec):
    """MPEG-4 video."""

    def is_video(self) -> bool:
        return True

    def marshal(self, pid: int) -> ElementaryStream:
        return ElementaryStream(pid, StreamType.MPEG4_VIDEO)


@dataclass(frozen=True)
class CodecOpus(Codec):
    """Opus audio."""

    channel_count: int

    def is_video(self) -> bool:
        return False

    def marshal(self, pid: int) -> ElementaryStream:
        return ElementaryStream(
            pid,
            StreamType.PRIVATE_DATA,
            (
                RegistrationDescriptor(OPUS_IDENTIFIER),
                ExtensionDescriptor(OPUS_EXTENSION_TAG, bytes([self.channel_count & 0xFF])),
            ),
        )