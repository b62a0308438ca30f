import pytest

from tsmedia.codecs import (
    OPUS_IDENTIFIER,
    CodecAC3,
    CodecH264,
    CodecH265,
    CodecMPEG1Audio,
    CodecMPEG1Video,
    CodecMPEG4Audio,
    CodecMPEG4Video,
    CodecOpus,
    ElementaryStream,
    ExtensionDescriptor,
    RegistrationDescriptor,
    StreamType,
)
from tsmedia.track import (
    Track,
    UnsupportedCodecError,
    assign_pids,
    find_opus_codec,
    track_from_elementary_stream,
)


@pytest.mark.parametrize(
    "stream_type, codec",
    [
        (StreamType.H265_VIDEO, CodecH265()),
        (StreamType.H264_VIDEO, CodecH264()),
        (StreamType.MPEG4_VIDEO, CodecMPEG4Video()),
        (StreamType.MPEG2_VIDEO, CodecMPEG1Video()),
        (StreamType.MPEG1_VIDEO, CodecMPEG1Video()),
        (StreamType.MPEG1_AUDIO, CodecMPEG1Audio()),
    ],
)
def test_static_stream_types(stream_type, codec):
    track = track_from_elementary_stream(ElementaryStream(256, stream_type))
    assert track == Track(codec=codec, pid=256)


@pytest.mark.parametrize(
    "codec",
    [CodecH264(), CodecH265(), CodecMPEG4Video(), CodecMPEG1Video(), CodecMPEG1Audio(), CodecOpus(2)],
)
def test_marshal_round_trip(codec):
    track = Track(codec=codec, pid=257)
    es = track.marshal()
    assert es.pid == 257
    assert track_from_elementary_stream(es) == track


def test_opus_marshal_descriptors():
    es = Track(codec=CodecOpus(channel_count=2), pid=257).marshal()
    assert es.stream_type == StreamType.PRIVATE_DATA
    assert find_opus_codec(es.descriptors) == CodecOpus(channel_count=2)


def test_private_data_without_opus_is_unsupported():
    with pytest.raises(UnsupportedCodecError):
        track_from_elementary_stream(ElementaryStream(256, StreamType.PRIVATE_DATA))


@pytest.mark.parametrize("stream_type", [StreamType.AAC_AUDIO, StreamType.AC3_AUDIO, 0x42])
def test_payload_or_unknown_types_unsupported(stream_type):
    with pytest.raises(UnsupportedCodecError):
        track_from_elementary_stream(ElementaryStream(256, stream_type))


def test_payload_codecs_still_marshal():
    assert Track(CodecMPEG4Audio(2, 48000, 2), 257).marshal() == ElementaryStream(257, StreamType.AAC_AUDIO)
    assert Track(CodecAC3(48000, 1), 257).marshal() == ElementaryStream(257, StreamType.AC3_AUDIO)


def test_find_opus_codec_requires_registration():
    descriptors = [ExtensionDescriptor(0x80, bytes([2]))]
    assert find_opus_codec(descriptors) is None


def test_find_opus_codec_wrong_identifier():
    descriptors = [
        RegistrationDescriptor(int.from_bytes(b"HEVC", "big")),
        ExtensionDescriptor(0x80, bytes([2])),
    ]
    assert find_opus_codec(descriptors) is None


@pytest.mark.parametrize(
    "extension",
    [ExtensionDescriptor(0x80, b""), ExtensionDescriptor(0x80, bytes([0])), ExtensionDescriptor(0x81, bytes([2]))],
)
def test_find_opus_codec_needs_channel_count(extension):
    assert find_opus_codec([RegistrationDescriptor(OPUS_IDENTIFIER), extension]) is None


def test_assign_pids_automatic():
    track = Track(codec=CodecH265())
    assign_pids([track])
    assert track.pid == 256


def test_assign_pids_keeps_existing():
    fixed = Track(codec=CodecH264(), pid=300)
    first = Track(codec=CodecH265())
    second = Track(codec=CodecOpus(2))
    next_pid = assign_pids([first, fixed, second], 256)
    assert fixed.pid == 300
    assert (first.pid, second.pid) == (256, 257)
    assert next_pid == second.pid + 1


def test_writer_state_not_compared():
    a = Track(codec=CodecH264(), pid=256)
    b = Track(codec=CodecH264(), pid=256)
    b.is_leading = True
    assert a == b