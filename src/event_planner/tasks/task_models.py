# src/event_planner/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum


def new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class TaskRecord:
    """
    A single task/event.

    Notes:
    - records are immutable; edits go through dataclasses.replace and TaskStore.update
    - due_date None means "no due date", not a zero timestamp
    """

    title: str
    id: str = field(default_factory=new_task_id)
    is_completed: bool = False
    notes: str | None = None
    due_date: datetime | None = None
    location_details: str | None = None

    def with_completion_toggled(self) -> TaskRecord:
        return replace(self, is_completed=not self.is_completed)


class TaskFilter(StrEnum):
    """List view filter; values are the labels shown to the user."""

    ALL = "All Tasks"
    PENDING = "Pending"
    COMPLETED = "Finished"

    @classmethod
    def parse(cls, raw: str | None, default: TaskFilter | None = None) -> TaskFilter:
        fallback = default or cls.PENDING
        if not raw:
            return fallback
        key = raw.strip().lower()
        aliases = {
            "all": cls.ALL,
            "all tasks": cls.ALL,
            "pending": cls.PENDING,
            "open": cls.PENDING,
            "todo": cls.PENDING,
            "done": cls.COMPLETED,
            "finished": cls.COMPLETED,
            "completed": cls.COMPLETED,
        }
        return aliases.get(key, fallback)


class ChangeKind(StrEnum):
    ADDED = "added"
    UPDATED = "updated"
    TOGGLED = "toggled"
    DELETED = "deleted"
    LOADED = "loaded"


@dataclass(frozen=True, slots=True)
class TaskChange:
    """Emitted by TaskStore after a mutation has been applied and persisted."""

    kind: ChangeKind
    task_ids: tuple[str, ...]
    tasks: tuple[TaskRecord, ...]
