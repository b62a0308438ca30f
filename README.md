# tsmedia

Pure-Python building blocks for working with MPEG transport streams.
The package has no runtime dependencies.

## Modules

### `tsmedia.codecs`

Codec descriptions as they appear in a program map table:
`CodecH264`, `CodecH265`, `CodecMPEG4Video`, `CodecMPEG1Video`,
`CodecMPEG4Audio` (`object_type`, `sample_rate`, `channel_count`),
`CodecMPEG1Audio`, `CodecAC3` (`sample_rate`, `channel_count`) and
`CodecOpus` (`channel_count`). All derive from the abstract `Codec`.

- `marshal(pid)` returns an `ElementaryStream` (`pid`, `stream_type`,
  `descriptors`). `CodecMPEG1Video` is written with the MPEG-2 video stream
  type. `CodecOpus` is written as private data with a
  `RegistrationDescriptor` for `"Opus"` and an `ExtensionDescriptor`
  (extension tag `0x80`) holding the channel count.
- `is_video()` returns `False` for `CodecMPEG4Audio` and `CodecOpus` and
  `True` for every other codec class.

`StreamType` is an `IntEnum` of the stream type values used.

### `tsmedia.track`

- `Track(codec, pid=0)` pairs a codec with a PID; `marshal()` returns its
  `ElementaryStream`.
- `track_from_elementary_stream(es)` builds a `Track` from a PMT entry. It
  recognises H.264, H.265, MPEG-4 video, MPEG-1/2 video, MPEG-1 audio and
  Opus (private data with the Opus descriptors). Anything else, including
  AAC and AC-3, whose parameters live in the stream payload, raises
  `UnsupportedCodecError`.
- `find_opus_codec(descriptors)` returns a `CodecOpus` or `None`.
- `assign_pids(tracks, start=256)` gives every track whose PID is 0 the next
  PID in turn and returns the next free one.

### `tsmedia.opus`

The Opus-in-TS control header and access unit: `OpusControlHeader` and
`OpusAccessUnit`, each with `decode(buf)` (a classmethod returning the object
and the number of bytes used), `encode()` and `encoded_size()`.
`encode_packets(packets)` and `decode_packets(data)` handle whole PES
payloads. Bad input raises `OpusDecodeError`.

### `tsmedia.readers`

File-like helpers, each with `read(size=-1)`:

- `BufferedReader(source)` reads the source in chunks of up to 1500 bytes
  and raises `PacketSizeError` when a chunk is not a multiple of 188 bytes.
- `RecordReader(source, limit=1 MiB)` keeps a copy of what it reads,
  available from `recorded()`, and raises `RecordLimitError` past the limit.
- `PlaybackReader(source, recorded=b"")` returns the recorded bytes first,
  then carries on from the source.

### `tsmedia.time_decoder`

`TimeDecoder(start)` turns 33-bit 90 kHz timestamps into the
`datetime.timedelta` elapsed since `start`, through wrap-around and
timestamps that move backwards.

## Examples

```python
from tsmedia.opus import encode_packets, decode_packets

payload = encode_packets([b"\x03", b"\x02"])
assert decode_packets(payload) == [b"\x03", b"\x02"]
```

```python
from tsmedia.time_decoder import TimeDecoder

decoder = TimeDecoder(0x1FFFFFFFF - 90000 + 1)
decoder.decode(90000)  # timedelta(seconds=2)
```

```python
from tsmedia.codecs import CodecOpus
from tsmedia.track import Track

track = Track(pid=256, codec=CodecOpus(channel_count=2))
es = track.marshal()
```

## What it does not do

The package does not read or write transport stream packets itself: there
is no demuxer or muxer, no PAT/PMT section parsing or writing, and no PES
packetisation. It supplies the pieces around those steps: PMT entry
descriptions, track mapping, Opus payload framing, readers and timestamp
decoding.

## Running the tests

```
pip install -e .[test]
pytest
```