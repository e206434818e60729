"""Per-line calibration values and their running sum.

Each line of the input contributes a two-digit number built from its first
and last ASCII digit. A line with a single digit repeats it (``a1b`` -> 11)
and a line without digits contributes nothing. Digits between the first and
last are ignored, so ``a1b2c`` and ``12`` yield the same value.

The scanner works on raw bytes; multi-byte encodings are not decoded and any
byte outside ``0``-``9`` that is not a newline is skipped.
"""

from __future__ import annotations

import enum
from typing import BinaryIO

from trebuchet.logging_setup import TRACE_LEVEL, get_logger, log_call

__all__ = [
    "INT_MAX",
    "CalibrationOverflowError",
    "CalibrationScanner",
    "CaptureState",
    "calibration_value",
    "sum_calibrations",
    "would_overflow",
]

logger = get_logger(__name__)

# Largest value of a 32-bit signed integer.
INT_MAX = 2**31 - 1

NEWLINE = ord("\n")
ZERO = ord("0")
NINE = ord("9")

CHUNK_SIZE = 64 * 1024


class CaptureState(str, enum.Enum):
    """How many digits have been recorded on the current line."""

    NONE = "none"
    ONE = "one"
    TWO = "two"


class CalibrationOverflowError(OverflowError):
    """Adding a line value would push the sum past the limit."""

    def __init__(self, total: int, candidate: int, limit: int) -> None:
        super().__init__(f"INTEGER OVERFLOW: {total} + {candidate} > {limit}")
        self.total = total
        self.candidate = candidate
        self.limit = limit


def calibration_value(first: int, last: int) -> int:
    """Return the two-digit value formed by ``first`` and ``last``.

    Args:
        first: Leftmost digit on the line (0-9).
        last: Rightmost digit on the line (0-9).

    Returns:
        ``10 * first + last``.
    """

    return 10 * first + last


def would_overflow(total: int, candidate: int, limit: int = INT_MAX) -> bool:
    """Return True if ``total + candidate`` would exceed ``limit``.

    The comparison is written as ``candidate > limit - total`` so the check
    itself never has to form the sum.
    """

    return candidate > limit - total


class CalibrationScanner:
    """Byte-at-a-time state machine accumulating calibration values.

    Feed bytes with :meth:`feed` or :meth:`feed_bytes`, then call
    :meth:`finish` to close the last line and obtain the sum. The scanner
    holds no I/O of its own.
    """

    def __init__(self, limit: int = INT_MAX) -> None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        self._limit = limit
        self._state = CaptureState.NONE
        self._first = 0
        self._last = 0
        self._total = 0
        self._lines = 0

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def total(self) -> int:
        return self._total

    @property
    def lines(self) -> int:
        """Number of line boundaries processed so far."""
        return self._lines

    def feed(self, byte: int) -> None:
        """Apply a single byte value (0-255)."""
        if byte == NEWLINE:
            self._end_line()
        elif ZERO <= byte <= NINE:
            self._record_digit(byte - ZERO)

    def feed_bytes(self, data: bytes) -> None:
        for byte in data:
            self.feed(byte)

    def finish(self) -> int:
        """Treat end-of-stream as a line boundary and return the sum."""
        self._end_line()
        return self._total

    def _record_digit(self, digit: int) -> None:
        if self._state is CaptureState.NONE:
            self._first = digit
            self._state = CaptureState.ONE
        else:
            self._last = digit
            self._state = CaptureState.TWO

    def _end_line(self) -> None:
        self._lines += 1
        if self._state is CaptureState.ONE:
            self._last = self._first
            self._state = CaptureState.TWO
        if self._state is CaptureState.TWO:
            value = calibration_value(self._first, self._last)
            if would_overflow(self._total, value, self._limit):
                raise CalibrationOverflowError(self._total, value, self._limit)
            self._total += value
            logger.log(TRACE_LEVEL, "line %d -> %d (sum=%d)", self._lines, value, self._total)
        self._state = CaptureState.NONE


@log_call()
def sum_calibrations(stream: BinaryIO, limit: int = INT_MAX) -> int:
    """Sum the calibration values of every line in ``stream``.

    Args:
        stream: Binary stream to read until exhausted. It is not closed.
        limit: Largest sum allowed; defaults to :data:`INT_MAX`.

    Returns:
        The total of all line values.

    Raises:
        CalibrationOverflowError: If the sum would exceed ``limit``.
        OSError: If reading the stream fails.
        ValueError: If ``limit`` is negative.
    """

    scanner = CalibrationScanner(limit=limit)
    for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
        scanner.feed_bytes(chunk)
    total = scanner.finish()
    logger.debug("summed %d lines, total=%d", scanner.lines, total)
    return total
