# src/event_planner/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every key has a usable default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "PLANNER"

DEFAULT_TASKS_STORAGE_KEY = "todoAppTasks_v2"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path
    tasks_storage_key: str

    # ---- Views ----
    default_filter: str

    # ---- Collaborators ----
    calendar_lookahead_days: int
    home_latitude: float | None
    home_longitude: float | None
    location_timeout_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "event-planner").strip() or "event-planner"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/event_planner"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")
        tasks_storage_key = (
            _env(_k("TASKS_STORAGE_KEY"), DEFAULT_TASKS_STORAGE_KEY).strip()
            or DEFAULT_TASKS_STORAGE_KEY
        )

        default_filter = _env(_k("DEFAULT_FILTER"), "pending").strip().lower() or "pending"

        calendar_lookahead_days = max(1, _env_int(_k("CALENDAR_LOOKAHEAD_DAYS"), 7))
        home_latitude = _env_float(_k("HOME_LATITUDE"), None)
        home_longitude = _env_float(_k("HOME_LONGITUDE"), None)
        location_timeout_seconds = _env_float(_k("LOCATION_TIMEOUT_SECONDS"), 10.0) or 10.0

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            tasks_storage_key=tasks_storage_key,
            default_filter=default_filter,
            calendar_lookahead_days=calendar_lookahead_days,
            home_latitude=home_latitude,
            home_longitude=home_longitude,
            location_timeout_seconds=location_timeout_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
