# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from event_planner.calendar_assist.local_calendar import LocalCalendar
from event_planner.core.state import AppState
from event_planner.tasks.kv_store import MemoryKeyValueStore
from event_planner.tasks.task_persistence import TaskPersistence
from event_planner.tasks.task_store import TaskStore

from .fakes import FakeLocationProvider, FakeResolver

STORAGE_KEY = "todoAppTasks_v2"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="event-planner-test",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        tasks_storage_key=STORAGE_KEY,
        default_filter="pending",
        calendar_lookahead_days=7,
        home_latitude=None,
        home_longitude=None,
        location_timeout_seconds=1.0,
    )


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(kv: MemoryKeyValueStore) -> TaskStore:
    return TaskStore(TaskPersistence(kv, key=STORAGE_KEY))


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState wired with an in-memory store and fake device services."""
    return AppState(
        settings=settings,
        task_store=store,
        location_provider=FakeLocationProvider(),
        location_resolver=FakeResolver(),
        calendar=LocalCalendar(),
    )
