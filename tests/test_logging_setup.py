# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from event_planner.logging_setup import _ConsoleFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("event_planner.tasks.task_store", logging.DEBUG, True),
        ("event_planner.cli.main", logging.INFO, True),
        ("event_planner.tasks.kv_store", logging.INFO, False),
        ("event_planner.tasks.kv_store", logging.WARNING, True),
        ("event_planner.tasks.task_persistence", logging.INFO, False),
        ("event_planner.tasks.task_persistence", logging.ERROR, True),
        ("asyncio", logging.WARNING, False),
        ("asyncio", logging.ERROR, True),
        ("py.warnings", logging.WARNING, False),
    ],
)
def test_console_filter(name: str, level: int, shown: bool) -> None:
    assert _ConsoleFilter().filter(_record(name, level)) is shown


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("event_planner.tasks.kv_store").info("slot opened")
        for h in root.handlers:
            h.flush()

        assert log_file == tmp_path / "logs" / "planner.log"
        assert "slot opened" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
