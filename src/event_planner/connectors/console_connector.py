# src/event_planner/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_models import ChangeKind, TaskChange

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (events=%s).", len(state.task_store))
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "event-planner"))
    _print_ts(f"[{app_name}] Use /help for commands, /list to see events, /exit to quit.\n")

    def on_change(change: TaskChange) -> None:
        if change.kind is not ChangeKind.LOADED:
            logger.debug("Tasks changed kind=%s ids=%s", change.kind, change.task_ids)

    unsubscribe = state.task_store.subscribe(on_change)

    try:
        while True:
            try:
                user_input = input(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not user_input.startswith("/"):
                # Bare text is shorthand for /add.
                user_input = f"/add {user_input}"

            try:
                with state.lock:
                    response = command_registry.handle(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response is not None:
                _print_ts(response)
    finally:
        unsubscribe()

    logger.info("Console connector finished.")
