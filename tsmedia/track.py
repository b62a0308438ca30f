"""MPEG-TS tracks and their mapping to and from PMT entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .codecs import (
    OPUS_EXTENSION_TAG,
    OPUS_IDENTIFIER,
    Codec,
    CodecH264,
    CodecH265,
    CodecMPEG1Audio,
    CodecMPEG1Video,
    CodecMPEG4Video,
    CodecOpus,
    Descriptor,
    ElementaryStream,
    ExtensionDescriptor,
    RegistrationDescriptor,
    StreamType,
)

FIRST_PID = 256


class UnsupportedCodecError(ValueError):
    """An elementary stream carries a codec that cannot be described."""


@dataclass
class Track:
    """One elementary stream of an MPEG-TS program."""

    codec: Codec
    pid: int = 0

    # Writer state, not part of the track's identity.
    is_leading: bool = field(default=False, compare=False, repr=False)
    mp3_checked: bool = field(default=False, compare=False, repr=False)

    def marshal(self) -> ElementaryStream:
        """Describe the track as a PMT entry."""
        return self.codec.marshal(self.pid)


def _has_opus_registration(descriptors: Iterable[Descriptor]) -> bool:
    return any(
        isinstance(d, RegistrationDescriptor) and d.format_identifier == OPUS_IDENTIFIER
        for d in descriptors
    )


def _opus_channel_count(descriptors: Iterable[Descriptor]) -> int:
    for d in descriptors:
        if isinstance(d, ExtensionDescriptor) and d.extension_tag == OPUS_EXTENSION_TAG and d.data:
            return d.data[0]
    return 0


def find_opus_codec(descriptors: Iterable[Descriptor]) -> Optional[CodecOpus]:
    """Return the Opus codec the descriptors announce, or ``None``."""
    descriptors = tuple(descriptors)
    if not _has_opus_registration(descriptors):
        return None
    channel_count = _opus_channel_count(descriptors)
    if channel_count <= 0:
        return None
    return CodecOpus(channel_count=channel_count)


_STATIC_CODECS = {
    StreamType.H265_VIDEO: CodecH265,
    StreamType.H264_VIDEO: CodecH264,
    StreamType.MPEG4_VIDEO: CodecMPEG4Video,
    StreamType.MPEG2_VIDEO: CodecMPEG1Video,
    StreamType.MPEG1_VIDEO: CodecMPEG1Video,
    StreamType.MPEG1_AUDIO: CodecMPEG1Audio,
}


def track_from_elementary_stream(es: ElementaryStream) -> Track:
    """Build a track from a PMT entry.

    Only codecs fully described by the PMT entry are recognised; codecs whose
    parameters live in the stream payload (AAC, AC-3) raise
    :class:`UnsupportedCodecError`, as does any unknown stream type.
    """
    factory = _STATIC_CODECS.get(es.stream_type)
    if factory is not None:
        return Track(codec=factory(), pid=es.pid)

    if es.stream_type == StreamType.PRIVATE_DATA:
        codec = find_opus_codec(es.descriptors)
        if codec is not None:
            return Track(codec=codec, pid=es.pid)

    raise UnsupportedCodecError("unsupported codec")


def assign_pids(tracks: Iterable[Track], start: int = FIRST_PID) -> int:
    """Give every track without a PID the next free one; return the next PID."""
    next_pid = start
    for track in tracks:
        if track.pid == 0:
            track.pid = next_pid
            next_pid += 1
    return next_pid