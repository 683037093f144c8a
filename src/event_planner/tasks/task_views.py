# src/event_planner/tasks/task_views.py

"""Read-only projections of the task list used by list screens."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .task_models import TaskFilter, TaskRecord

_EMPTY_STATES: dict[TaskFilter, tuple[str, str]] = {
    TaskFilter.ALL: ("No Events Yet", "Use /add to create your first event."),
    TaskFilter.PENDING: ("All Caught Up!", "You have no pending events."),
    TaskFilter.COMPLETED: ("No Finished Events", "Completed events will appear here."),
}


def filter_tasks(tasks: Iterable[TaskRecord], task_filter: TaskFilter) -> list[TaskRecord]:
    if task_filter is TaskFilter.PENDING:
        return [t for t in tasks if not t.is_completed]
    if task_filter is TaskFilter.COMPLETED:
        return [t for t in tasks if t.is_completed]
    return list(tasks)


def sort_by_due_date(tasks: Iterable[TaskRecord]) -> list[TaskRecord]:
    """Dated tasks first (earliest due), undated after; ties keep list order."""
    items = list(tasks)
    dated = [t for t in items if t.due_date is not None]
    undated = [t for t in items if t.due_date is None]
    dated.sort(key=lambda t: t.due_date.timestamp())  # type: ignore[union-attr]
    return dated + undated


def empty_state(task_filter: TaskFilter) -> tuple[str, str]:
    return _EMPTY_STATES[task_filter]


def ids_at(view: Sequence[TaskRecord], positions: Iterable[int]) -> list[str]:
    return [view[p].id for p in positions if 0 <= p < len(view)]
