"""Trebuchet calibration summer.

Sums per-line calibration values (first and last digit of each line) read
from a file or standard input.
"""

from trebuchet.calibration import (
    INT_MAX,
    CalibrationOverflowError,
    CalibrationScanner,
    CaptureState,
    calibration_value,
    sum_calibrations,
    would_overflow,
)

__all__ = [
    "INT_MAX",
    "CalibrationOverflowError",
    "CalibrationScanner",
    "CaptureState",
    "calibration_value",
    "sum_calibrations",
    "would_overflow",
]
