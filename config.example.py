# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Keep machine-specific values (home coordinates, data paths) in .env, which is gitignored.
"""

ENV_VARS = {
    # App / logging
    "PLANNER_APP_NAME": "App display name (default: event-planner).",
    "PLANNER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "PLANNER_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Paths (gitignored)
    "PLANNER_DATA_DIR": "Local data directory (default: .local/event_planner).",
    "PLANNER_TASKS_DB_PATH": "Key-value SQLite path (default: <data_dir>/tasks.sqlite3).",
    "PLANNER_TASKS_STORAGE_KEY": "Key holding the task list (default: todoAppTasks_v2).",
    # Views
    "PLANNER_DEFAULT_FILTER": "Initial list filter: all | pending | done (default: pending).",
    # Collaborators
    "PLANNER_CALENDAR_LOOKAHEAD_DAYS": "Days shown by /calendar (default: 7).",
    "PLANNER_HOME_LATITUDE": "Fixed latitude used by /locate (unset => location unavailable).",
    "PLANNER_HOME_LONGITUDE": "Fixed longitude used by /locate.",
    "PLANNER_LOCATION_TIMEOUT_SECONDS": "Timeout for position / geocoding calls (default: 10).",
}
