# src/event_planner/tasks/task_store.py

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from datetime import datetime

from .task_models import ChangeKind, TaskChange, TaskRecord, new_task_id
from .task_persistence import TaskPersistence

logger = logging.getLogger(__name__)

TaskListener = Callable[[TaskChange], None]


class TaskStore:
    """
    Owner of the task collection.

    - canonical order is insertion order (views may re-sort copies)
    - every effective mutation is written through to persistence, then
      announced to subscribers as a TaskChange
    - no-op mutations (unknown id, blank title) neither persist nor notify

    Thread-safety:
    - mutations are serialized with an RLock so the in-memory list and the
      last persisted payload move together
    """

    def __init__(self, persistence: TaskPersistence) -> None:
        self._persistence = persistence
        self._tasks: list[TaskRecord] = []
        self._listeners: list[TaskListener] = []
        self._lock = threading.RLock()
        self.reload()
        logger.info("TaskStore ready key=%s total=%s", persistence.key, len(self._tasks))

    # ---- observers ----

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, kind: ChangeKind, task_ids: Iterable[str]) -> None:
        change = TaskChange(kind=kind, task_ids=tuple(task_ids), tasks=tuple(self._tasks))
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("Task listener failed kind=%s", kind)

    def _commit(self, kind: ChangeKind, task_ids: Iterable[str]) -> None:
        # In-memory state is kept even if the write fails.
        self._persistence.save(self._tasks)
        self._notify(kind, task_ids)

    # ---- queries ----

    def list(self) -> list[TaskRecord]:
        with self._lock:
            return list(self._tasks)

    def get(self, task_id: str) -> TaskRecord | None:
        with self._lock:
            idx = self._index_of(task_id)
            return None if idx is None else self._tasks[idx]

    def __len__(self) -> int:
        return len(self._tasks)

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    # ---- loading ----

    def reload(self) -> None:
        with self._lock:
            self._tasks = self._persistence.load()
            self._notify(ChangeKind.LOADED, [t.id for t in self._tasks])

    # ---- mutations ----

    def add(
        self,
        title: str,
        notes: str | None = None,
        due_date: datetime | None = None,
        location_details: str | None = None,
    ) -> TaskRecord | None:
        if not title or not title.strip():
            logger.debug("Ignoring add with blank title.")
            return None

        with self._lock:
            existing = {t.id for t in self._tasks}
            task = TaskRecord(
                title=title,
                notes=notes,
                due_date=due_date,
                location_details=location_details,
            )
            while task.id in existing:
                task = replace(task, id=new_task_id())

            self._tasks.append(task)
            logger.debug("Task added id=%s due_date=%s", task.id, due_date)
            self._commit(ChangeKind.ADDED, [task.id])
            return task

    def update(self, task: TaskRecord) -> bool:
        if not task.title or not task.title.strip():
            logger.warning("Ignoring update with blank title id=%s", task.id)
            return False

        with self._lock:
            idx = self._index_of(task.id)
            if idx is None:
                logger.debug("Ignoring update for unknown id=%s", task.id)
                return False
            self._tasks[idx] = task
            self._commit(ChangeKind.UPDATED, [task.id])
            return True

    def toggle_completion(self, task_id: str) -> TaskRecord | None:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return None
            toggled = self._tasks[idx].with_completion_toggled()
            self._tasks[idx] = toggled
            self._commit(ChangeKind.TOGGLED, [task_id])
            return toggled

    def delete(self, task_id: str) -> bool:
        return self.delete_many([task_id]) == 1

    def delete_many(self, task_ids: Iterable[str]) -> int:
        wanted = set(task_ids)
        if not wanted:
            return 0

        with self._lock:
            removed = [t.id for t in self._tasks if t.id in wanted]
            if not removed:
                return 0
            self._tasks = [t for t in self._tasks if t.id not in wanted]
            logger.debug("Tasks deleted ids=%s", removed)
            self._commit(ChangeKind.DELETED, removed)
            return len(removed)

    def delete_at(
        self,
        positions: Iterable[int],
        view: Sequence[TaskRecord] | None = None,
    ) -> int:
        """
        Delete by row offsets.

        Offsets index `view` when given (e.g. a filtered list), otherwise the
        canonical list. Out-of-range offsets are ignored.
        """
        with self._lock:
            rows = self._tasks if view is None else list(view)
            ids = [rows[p].id for p in set(positions) if 0 <= p < len(rows)]
            return self.delete_many(ids)
