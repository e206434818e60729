from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterator
from pathlib import Path

import pytest

from trebuchet import logging_setup


@pytest.fixture
def reset_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    yield monkeypatch
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("TREBUCHET_LOG_DIR", raising=False)
    logging_setup.setup_logging(force=True)


def test_trace_level_registered() -> None:
    assert logging.getLevelName(logging_setup.TRACE_LEVEL) == "TRACE"
    assert not hasattr(logging.Logger, "trace")


def test_level_from_env(reset_logging: pytest.MonkeyPatch) -> None:
    reset_logging.setenv("LOG_LEVEL", "trace")
    logging_setup.setup_logging(force=True)
    assert logging.getLogger("trebuchet").level == logging_setup.TRACE_LEVEL

    reset_logging.setenv("LOG_LEVEL", "debug")
    logging_setup.setup_logging(force=True)
    assert logging.getLogger("trebuchet").level == logging.DEBUG

    reset_logging.setenv("LOG_LEVEL", "bogus")
    logging_setup.setup_logging(force=True)
    assert logging.getLogger("trebuchet").level == logging.WARNING


def test_setup_is_idempotent(reset_logging: pytest.MonkeyPatch) -> None:
    logging_setup.setup_logging(force=True)
    logging_setup.setup_logging()
    logging_setup.setup_logging()
    assert len(logging.getLogger("trebuchet").handlers) == 1


def test_file_handler_when_log_dir_set(tmp_path: Path, reset_logging: pytest.MonkeyPatch) -> None:
    reset_logging.setenv("TREBUCHET_LOG_DIR", str(tmp_path / "logs"))
    logging_setup.setup_logging(force=True)
    handlers = logging.getLogger("trebuchet").handlers
    assert any(isinstance(h, logging.handlers.TimedRotatingFileHandler) for h in handlers)
    assert (tmp_path / "logs").is_dir()

    reset_logging.delenv("TREBUCHET_LOG_DIR")
    logging_setup.setup_logging(force=True)
    assert len(logging.getLogger("trebuchet").handlers) == 1


def test_log_call_logs_entry_exit_and_errors(caplog: pytest.LogCaptureFixture) -> None:
    @logging_setup.log_call(level=logging.INFO)
    def double(x: int) -> int:
        if x < 0:
            raise ValueError("negative")
        return x * 2

    caplog.set_level(logging.INFO)
    assert double(3) == 6
    with pytest.raises(ValueError):
        double(-1)
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("ENTER") and "double" in m for m in messages)
    assert any("EXIT" in m and "6" in m for m in messages)
    assert any("ERROR in" in m and "negative" in m for m in messages)
    assert all(r.levelno == logging.INFO for r in caplog.records)
