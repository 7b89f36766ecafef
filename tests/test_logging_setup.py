# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tasklist.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_file_gets_everything_console_only_own_logs(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], restore_root_logging
) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.INFO, file_level=logging.DEBUG)

    logging.getLogger("tasklist.test").info("own info")
    logging.getLogger("tasklist.test").debug("own debug")
    logging.getLogger("somelib").warning("third-party warning")

    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "tasklist.log"
    written = log_file.read_text("utf-8")
    assert "own info" in written
    assert "own debug" in written
    assert "third-party warning" in written

    console = capsys.readouterr().err
    assert "own info" in console
    assert "own debug" not in console
    assert "third-party warning" not in console


def test_repeated_setup_does_not_duplicate_handlers(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)
    assert len(logging.getLogger().handlers) == 2
