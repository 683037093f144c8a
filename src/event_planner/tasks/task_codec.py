# src/event_planner/tasks/task_codec.py

"""
JSON encoding of the task collection.

Wire shape (one JSON array, insertion order):
  [{"id": "...", "title": "...", "isCompleted": false,
    "notes": "...", "dueDate": "2024-05-01T09:30:00", "locationDetails": "..."}]

Optional keys are omitted when absent. dueDate is always ISO-8601.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from .task_models import TaskRecord


class TaskDecodeError(ValueError):
    """Stored payload could not be turned back into TaskRecords."""


def task_to_dict(task: TaskRecord) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": task.id,
        "title": task.title,
        "isCompleted": task.is_completed,
    }
    if task.notes is not None:
        out["notes"] = task.notes
    if task.due_date is not None:
        out["dueDate"] = task.due_date.isoformat()
    if task.location_details is not None:
        out["locationDetails"] = task.location_details
    return out


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    val = raw.get(key)
    if val is None:
        return None
    if not isinstance(val, str):
        raise TaskDecodeError(f"{key} must be a string, got {type(val).__name__}")
    return val


def task_from_dict(raw: Any) -> TaskRecord:
    if not isinstance(raw, dict):
        raise TaskDecodeError(f"task entry must be an object, got {type(raw).__name__}")

    task_id = raw.get("id")
    title = raw.get("title")
    if not isinstance(task_id, str) or not task_id:
        raise TaskDecodeError("task entry is missing a string id")
    if not isinstance(title, str):
        raise TaskDecodeError(f"task {task_id} is missing a string title")
    if not title.strip():
        raise TaskDecodeError(f"task {task_id} has a blank title")

    completed = raw.get("isCompleted", False)
    if not isinstance(completed, bool):
        raise TaskDecodeError(f"task {task_id}: isCompleted must be a boolean")

    due_raw = _optional_str(raw, "dueDate")
    due_date: datetime | None = None
    if due_raw is not None:
        try:
            due_date = datetime.fromisoformat(due_raw)
        except ValueError as e:
            raise TaskDecodeError(f"task {task_id}: bad dueDate {due_raw!r}") from e

    return TaskRecord(
        id=task_id,
        title=title,
        is_completed=completed,
        notes=_optional_str(raw, "notes"),
        due_date=due_date,
        location_details=_optional_str(raw, "locationDetails"),
    )


def encode_tasks(tasks: Iterable[TaskRecord]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False)


def decode_tasks(payload: str | bytes) -> list[TaskRecord]:
    try:
        data = json.loads(payload)
    except (ValueError, TypeError) as e:
        raise TaskDecodeError("stored tasks payload is not valid JSON") from e

    if not isinstance(data, list):
        raise TaskDecodeError(f"stored tasks payload must be a list, got {type(data).__name__}")

    tasks = [task_from_dict(item) for item in data]

    seen: set[str] = set()
    for t in tasks:
        if t.id in seen:
            raise TaskDecodeError(f"duplicate task id {t.id}")
        seen.add(t.id)
    return tasks
