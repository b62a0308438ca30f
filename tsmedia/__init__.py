"""MPEG-TS codec descriptions, PMT track mapping, Opus framing, stream readers and timestamp decoding."""

__version__ = "0.1.0"

__all__ = ["codecs", "opus", "readers", "time_decoder", "track"]