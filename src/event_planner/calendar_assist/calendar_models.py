# src/event_planner/calendar_assist/calendar_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_CALENDAR = "default"


class CalendarError(RuntimeError):
    pass


class CalendarAccessError(CalendarError):
    """Calendar access has not been granted."""


@dataclass(frozen=True, slots=True)
class CalendarEntry:
    title: str
    start: datetime
    end: datetime
    notes: str | None = None
    calendar: str = DEFAULT_CALENDAR
