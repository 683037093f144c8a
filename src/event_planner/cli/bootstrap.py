# src/event_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage/location/calendar).
"""

from __future__ import annotations

import logging

from ..calendar_assist.local_calendar import LocalCalendar
from ..config import get_settings
from ..core.state import AppState
from ..location.location_models import Coordinates, Placemark
from ..location.providers import FixedLocationProvider, PlacemarkResolver
from ..tasks.kv_store import SqliteKeyValueStore
from ..tasks.task_models import TaskFilter
from ..tasks.task_persistence import TaskPersistence
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


async def _no_placemarks(coords: Coordinates) -> list[Placemark]:
    # No geocoding service offline; the session falls back to coordinates.
    return []


def create_task_store(settings) -> TaskStore:
    kv = SqliteKeyValueStore(settings.tasks_db_path)
    return TaskStore(TaskPersistence(kv, key=settings.tasks_storage_key))


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    state = AppState(
        settings=settings,
        task_store=create_task_store(settings),
        location_provider=FixedLocationProvider.from_settings(settings),
        location_resolver=PlacemarkResolver(_no_placemarks),
        calendar=LocalCalendar(),
        current_filter=TaskFilter.parse(getattr(settings, "default_filter", None)),
    )
    logger.debug("AppState created data_dir=%s", settings.data_dir)
    return state
