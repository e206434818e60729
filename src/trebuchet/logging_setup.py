"""Logging configuration shared by the library and the CLI.

Provides helpers:
* ``setup_logging`` - idempotent configuration with a stderr console handler
    and an optional rotating file handler.
* ``get_logger`` - convenience that ensures configuration first.
* ``log_call`` - lightweight decorator for entry/exit tracing.

Standard output is reserved for the ``Sum = ...`` line, so every handler
configured here writes to stderr or to a file.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from functools import wraps
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import ParamSpec, TypeVar

# ----- Custom TRACE level -------------------------------------------------
TRACE_LEVEL = 5
if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

# ----- Formatter -----------------------------------------------------------
DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s | %(message)s"

LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_DIR_ENV = "TREBUCHET_LOG_DIR"


def _level_from_env() -> int:
    level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    if level_name == "TRACE":
        return TRACE_LEVEL
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(force: bool = False) -> None:
    """Configure the ``trebuchet`` logger hierarchy.

    Level comes from ``LOG_LEVEL`` (default WARNING). A console handler
    writes to stderr; when ``TREBUCHET_LOG_DIR`` is set a daily rotating
    file keeping 7 backups is added as well. Idempotent unless ``force``.
    """
    if getattr(setup_logging, "_configured", False) and not force:
        return

    root = logging.getLogger("trebuchet")
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()

    level = _level_from_env()
    root.setLevel(level)

    fmt = logging.Formatter(DEFAULT_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    console.setLevel(level)
    root.addHandler(console)

    log_dir = os.getenv(LOG_DIR_ENV)
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            path / "trebuchet.log",
            when="midnight",
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(fmt)
        file_handler.setLevel(TRACE_LEVEL)
        root.addHandler(file_handler)

    setup_logging._configured = True  # type: ignore[attr-defined]


def get_logger(name: str) -> logging.Logger:
    """Return a logger ensuring configuration is applied first."""
    setup_logging()
    return logging.getLogger(name)


P = ParamSpec("P")
R = TypeVar("R")


def log_call(
    level: int = logging.DEBUG,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Return decorator logging entry/exit of target function.

    Exceptions are logged at the same ``level`` and re-raised; reporting
    them to the user is left to the caller.

    Example::

        @log_call()
        def my_func(a, b): ...
    """

    def _decorator(fn: Callable[P, R]) -> Callable[P, R]:
        logger = get_logger(fn.__module__)

        @wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            if logger.isEnabledFor(level):
                logger.log(
                    level,
                    "ENTER %s args=%s kwargs=%s",
                    fn.__qualname__,
                    _shorten(args),
                    _shorten(kwargs),
                )
            try:
                result = fn(*args, **kwargs)
            except Exception as e:
                logger.log(level, "ERROR in %s: %s", fn.__qualname__, e)
                raise
            if logger.isEnabledFor(level):
                logger.log(
                    level,
                    "EXIT %s -> %s",
                    fn.__qualname__,
                    _shorten(result),
                )
            return result

        return wrapper

    return _decorator


def _shorten(obj: object, limit: int = 120) -> str:
    """Return a truncated repr for logging (never raises)."""
    try:  # pragma: no cover
        s = repr(obj)
        if len(s) > limit:
            return s[: limit - 3] + "..."
        return s
    except Exception:  # noqa: BLE001
        return type(obj).__name__
