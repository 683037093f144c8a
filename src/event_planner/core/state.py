# src/event_planner/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import TaskFilter, TaskRecord
from ..tasks.task_store import TaskStore
from .ports import CalendarAssist, LocationProvider, LocationResolver


@dataclass
class AppState:
    # Settings object (real Settings or a test namespace).
    settings: Any

    task_store: TaskStore
    location_provider: LocationProvider
    location_resolver: LocationResolver
    calendar: CalendarAssist

    current_filter: TaskFilter = TaskFilter.PENDING
    sort_by_date: bool = False

    # Rows shown by the last /list; row numbers in commands index this.
    last_view: list[TaskRecord] = field(default_factory=list)

    lock: threading.RLock = field(default_factory=threading.RLock)
