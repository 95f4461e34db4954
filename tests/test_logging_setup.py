# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from fixer1132.logging_setup import _ConsoleNoiseFilter, setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("fixer1132.test").debug("debug line goes to file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "fixer.log"
    assert "debug line goes to file" in log_file.read_text("utf-8")


def test_console_filter() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("fixer1132.core.service", logging.INFO))
    assert not f.filter(_record("fixer1132.tasks.task_runner", logging.WARNING))
    assert f.filter(_record("fixer1132.tasks.task_runner", logging.ERROR))
    assert not f.filter(_record("httpx", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
