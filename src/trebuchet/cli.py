"""Command-line interface for the calibration summer.

Usage:
    trebuchet [filename]

With no argument the input is read from standard input. The result is
printed as ``Sum = <n>``; any failure is reported on stderr with a non-zero
exit code and no sum.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import BinaryIO

from trebuchet.calibration import CalibrationOverflowError, sum_calibrations
from trebuchet.logging_setup import get_logger

__all__ = ["EXIT_INTERRUPTED", "EXIT_IO", "EXIT_OK", "EXIT_OVERFLOW", "EXIT_USAGE", "main"]

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_IO = 3
EXIT_OVERFLOW = 4
EXIT_INTERRUPTED = 130

STDIN_PROMPT = "Reading from stdin... (press ^C to exit).\n"


def _run(stream: BinaryIO) -> int:
    try:
        total = sum_calibrations(stream)
    except CalibrationOverflowError as exc:
        # User-facing report is the stderr line below; keep the log under WARNING.
        logger.info("summation aborted: %s", exc)
        sys.stderr.write(f"{exc}\n")
        return EXIT_OVERFLOW
    sys.stdout.write(f"Sum = {total}\n")
    return EXIT_OK


def _run_path(raw: str) -> int:
    in_path = Path(raw)
    logger.info("reading from %s", in_path)
    try:
        f = in_path.open("rb")
    except OSError as exc:
        logger.info("cannot open %s: %s", in_path, exc)
        sys.stderr.write(f"Unable to open file: {raw}\n")
        return EXIT_IO

    with f:
        try:
            return _run(f)
        except OSError as exc:
            logger.info("failed reading %s: %s", in_path, exc)
            sys.stderr.write(f"Error reading {raw}: {exc}\n")
            return EXIT_IO


def _run_stdin() -> int:
    logger.info("reading from stdin")
    sys.stderr.write(STDIN_PROMPT)
    try:
        return _run(sys.stdin.buffer)
    except OSError as exc:
        logger.info("failed reading stdin: %s", exc)
        sys.stderr.write(f"Error reading stdin: {exc}\n")
        return EXIT_IO


def main(argv: list[str] | None = None, prog: str = "trebuchet") -> int:
    """Run the calibration CLI.

    Args:
        argv: Command-line arguments, expected ``[]`` or ``[filename]``.
            If None, ``sys.argv[1:]`` is used.
        prog: Program name shown in the usage message.

    Returns:
        Process exit code (0 on success, non-zero on error).
    """

    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        sys.stderr.write(f"Usage: {prog} [filename]\n")
        return EXIT_USAGE

    try:
        return _run_path(args[0]) if args else _run_stdin()
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted\n")
        return EXIT_INTERRUPTED


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(main())
