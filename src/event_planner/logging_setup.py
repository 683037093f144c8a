# src/event_planner/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Storage internals log every open/save at INFO; on the console that would
# interleave with the REPL prompt after each command.
_CONSOLE_QUIET = (
    "event_planner.tasks.kv_store",
    "event_planner.tasks.task_persistence",
)


class _ConsoleFilter(logging.Filter):
    """
    What the interactive console shows:
    - storage internals only at WARNING+
    - the rest of event_planner as-is
    - third-party libraries and py.warnings only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith(_CONSOLE_QUIET):
            return record.levelno >= logging.WARNING
        if name == "event_planner" or name.startswith("event_planner."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/event_planner",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Console handler on stderr (filtered) plus planner.log in log_dir with
    everything at file_level. Replaces existing root handlers, so call it
    once from the entrypoint. Returns the log file path.
    """
    log_file = Path(log_dir) / "planner.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ConsoleFilter())

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)

    for handler in (console, file_handler):
        handler.setFormatter(fmt)
        root.addHandler(handler)

    logging.captureWarnings(True)
    return log_file
