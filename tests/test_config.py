# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from event_planner.config import DEFAULT_TASKS_STORAGE_KEY, Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PLANNER_DATA_DIR",
        "PLANNER_TASKS_DB_PATH",
        "PLANNER_TASKS_STORAGE_KEY",
        "PLANNER_HOME_LATITUDE",
        "PLANNER_CALENDAR_LOOKAHEAD_DAYS",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.tasks_storage_key == DEFAULT_TASKS_STORAGE_KEY == "todoAppTasks_v2"
    assert s.tasks_db_path == s.data_dir / "tasks.sqlite3"
    assert s.home_latitude is None
    assert s.calendar_lookahead_days == 7


def test_env_overrides_and_bad_numbers(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PLANNER_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("PLANNER_TASKS_DB_PATH", raising=False)
    monkeypatch.setenv("PLANNER_CALENDAR_LOOKAHEAD_DAYS", "soon")
    monkeypatch.setenv("PLANNER_HOME_LATITUDE", "51.5")
    monkeypatch.setenv("PLANNER_HOME_LONGITUDE", "-0.12")
    monkeypatch.setenv("PLANNER_CONSOLE_ENABLED", "off")

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.calendar_lookahead_days == 7
    assert (s.home_latitude, s.home_longitude) == (51.5, -0.12)
    assert s.console_enabled is False
