# src/event_planner/cli/commands.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from ..core.state import AppState
from ..tasks.edit_session import TaskEditSession
from ..tasks.task_models import TaskFilter, TaskRecord
from ..tasks.task_views import empty_state, filter_tasks, sort_by_due_date

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."
        return handler(state, parts[1:])

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----

def current_view(state: AppState) -> list[TaskRecord]:
    view = filter_tasks(state.task_store.list(), state.current_filter)
    if state.sort_by_date:
        view = sort_by_due_date(view)
    return view


def format_task_line(n: int, task: TaskRecord) -> str:
    mark = "x" if task.is_completed else " "
    line = f"{n}. [{mark}] {task.title}"
    if task.due_date is not None:
        line += f" (due {task.due_date.strftime('%Y-%m-%d %H:%M')})"
    if task.location_details:
        line += f" @ {task.location_details}"
    if task.notes:
        line += f"\n     {task.notes}"
    return line


def _row(state: AppState, raw: str) -> TaskRecord | None:
    try:
        n = int(raw)
    except ValueError:
        return None
    if not state.last_view:
        state.last_view = current_view(state)
    if n < 1 or n > len(state.last_view):
        return None
    # The row may be stale; always act on the stored version.
    return state.task_store.get(state.last_view[n - 1].id)


def parse_due(raw: str) -> datetime | None:
    """'YYYY-MM-DD' or 'YYYY-MM-DDTHH:MM'; raises ValueError otherwise."""
    return datetime.fromisoformat(raw.strip())


# ---- handlers ----

def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list                 -> current filter
    /list all|pending|done
    /list ... --by-date   -> sort by due date
    """
    words = [a for a in args if not a.startswith("--")]
    flags = {a.lower() for a in args if a.startswith("--")}

    if words:
        state.current_filter = TaskFilter.parse(words[0], state.current_filter)
    state.sort_by_date = "--by-date" in flags

    view = current_view(state)
    state.last_view = view

    if not view:
        title, subtitle = empty_state(state.current_filter)
        return f"{title}\n{subtitle}"

    lines = [f"{state.current_filter.value}:"]
    lines.extend(format_task_line(i, t) for i, t in enumerate(view, start=1))
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str]) -> str:
    """/add <title> [| notes]"""
    title, _, notes = " ".join(args).partition("|")
    session = TaskEditSession.begin()
    session.title = title.strip()
    session.notes = notes.strip()
    if not session.can_commit:
        session.discard()
        return "Usage: /add <title> [| notes]"

    task = session.commit(state.task_store)
    if task is None:
        return "Event was not created."
    state.last_view = current_view(state)
    return f"Created: {task.title}"


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <n>"
    task = _row(state, args[0])
    if task is None:
        return f"No event #{args[0]}."
    toggled = state.task_store.toggle_completion(task.id)
    if toggled is None:
        return f"No event #{args[0]}."
    status = "finished" if toggled.is_completed else "pending"
    return f"{toggled.title}: marked {status}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    """/edit <n> title|notes|location <value...>"""
    if len(args) < 2:
        return "Usage: /edit <n> title|notes|location <value>"
    task = _row(state, args[0])
    if task is None:
        return f"No event #{args[0]}."

    field_name = args[1].lower()
    value = " ".join(args[2:])

    session = TaskEditSession.begin(task)
    if field_name == "title":
        session.title = value
    elif field_name == "notes":
        session.notes = value
    elif field_name in ("location", "loc"):
        session.set_location_text(value)
    else:
        session.discard()
        return f"Unknown field: {field_name}. Use title, notes or location."

    if not session.can_commit:
        session.discard()
        return "Title cannot be empty."

    updated = session.commit(state.task_store)
    if updated is None:
        return "Event no longer exists."
    return f"Updated: {updated.title}"


def cmd_due(state: AppState, args: list[str]) -> str:
    """/due <n> YYYY-MM-DD[THH:MM] | none"""
    if len(args) < 2:
        return "Usage: /due <n> YYYY-MM-DD[THH:MM] | none"
    task = _row(state, args[0])
    if task is None:
        return f"No event #{args[0]}."

    session = TaskEditSession.begin(task)
    if args[1].lower() in ("none", "off", "-"):
        session.include_due_date = False
    else:
        try:
            session.set_due_date(parse_due(args[1]))
        except ValueError:
            session.discard()
            return f"Bad date: {args[1]}. Use YYYY-MM-DD or YYYY-MM-DDTHH:MM."

    updated = session.commit(state.task_store)
    if updated is None:
        return "Event no longer exists."
    if updated.due_date is None:
        return f"{updated.title}: due date cleared."
    return f"{updated.title}: due {updated.due_date.strftime('%Y-%m-%d %H:%M')}."


def cmd_delete(state: AppState, args: list[str]) -> str:
    """/delete <n> [<n> ...] (row numbers of the last list)"""
    if not args:
        return "Usage: /delete <n> [<n> ...]"
    if not state.last_view:
        state.last_view = current_view(state)

    positions: list[int] = []
    for raw in args:
        try:
            positions.append(int(raw) - 1)
        except ValueError:
            return f"Not a row number: {raw}"

    removed = state.task_store.delete_at(positions, view=state.last_view)
    state.last_view = current_view(state)
    return f"Deleted {removed} event(s)."


def cmd_locate(state: AppState, args: list[str]) -> str:
    """/locate <n> -> fill location from the current position"""
    if not args:
        return "Usage: /locate <n>"
    task = _row(state, args[0])
    if task is None:
        return f"No event #{args[0]}."

    session = TaskEditSession.begin(task)
    timeout = getattr(state.settings, "location_timeout_seconds", None)
    asyncio.run(
        session.fetch_location(
            state.location_provider,
            state.location_resolver,
            timeout=timeout,
        )
    )
    if not session.location_autofilled:
        reason = session.location_error or "unknown error"
        session.discard()
        return f"Location unavailable ({reason}). Use /edit {args[0]} location <text>."

    updated = session.commit(state.task_store)
    if updated is None:
        return "Event no longer exists."
    return f"{updated.title} @ {updated.location_details}"


def cmd_calendar(state: AppState, args: list[str]) -> str:
    """/calendar [days] -> upcoming calendar entries (read-only)"""
    days = int(getattr(state.settings, "calendar_lookahead_days", 7))
    if args:
        try:
            days = max(1, int(args[0]))
        except ValueError:
            return "Usage: /calendar [days]"

    if not asyncio.run(state.calendar.request_access()):
        return "Calendar access was denied or restricted."

    entries = state.calendar.upcoming(days=days)
    if not entries:
        return f"No calendar entries in the next {days} day(s)."
    lines = [f"Calendar, next {days} day(s):"]
    for e in entries:
        lines.append(f"  {e.start.strftime('%Y-%m-%d %H:%M')}  {e.title}")
    return "\n".join(lines)


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list()
    done = sum(1 for t in tasks if t.is_completed)
    return (
        "Status:\n"
        f"  Events: {len(tasks)} ({len(tasks) - done} pending, {done} finished)\n"
        f"  Filter: {state.current_filter.value}"
        f"{' (by date)' if state.sort_by_date else ''}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "list", cmd_list, help_text="List events: /list [all|pending|done] [--by-date].", aliases=["ls"]
)
registry.register("add", cmd_add, help_text="Create an event: /add <title> [| notes].")
registry.register("done", cmd_done, help_text="Toggle finished: /done <n>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Edit: /edit <n> title|notes|location <value>.")
registry.register("due", cmd_due, help_text="Set due date: /due <n> YYYY-MM-DD[THH:MM] | none.")
registry.register("delete", cmd_delete, help_text="Delete rows: /delete <n> [<n> ...].", aliases=["rm"])
registry.register("locate", cmd_locate, help_text="Fill location from current position: /locate <n>.")
registry.register("calendar", cmd_calendar, help_text="Upcoming calendar entries: /calendar [days].")
registry.register("status", cmd_status, help_text="Show event counts and current filter.")
