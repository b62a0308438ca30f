"""Decoding of 33-bit MPEG-TS timestamps into a continuous timeline."""

from __future__ import annotations

from datetime import timedelta

MAXIMUM = 0x1FFFFFFFF  # 33 bits
NEGATIVE_THRESHOLD = MAXIMUM // 2
CLOCK_RATE = 90000
_NS_PER_SECOND = 1_000_000_000


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class TimeDecoder:
    """Turns wrapping 90 kHz timestamps into elapsed time since a start value."""

    def __init__(self, start: int) -> None:
        self._prev = start
        self._overall = 0

    def decode(self, ts: int) -> timedelta:
        """Return the time elapsed between the start timestamp and ``ts``."""
        diff = (ts - self._prev) & MAXIMUM
        if diff > NEGATIVE_THRESHOLD:
            self._overall -= (self._prev - ts) & MAXIMUM
        else:
            self._overall += diff
        self._prev = ts

        nanoseconds = _trunc_div(self._overall * _NS_PER_SECOND, CLOCK_RATE)
        return timedelta(microseconds=_trunc_div(nanoseconds, 1000))