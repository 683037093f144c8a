# src/event_planner/calendar_assist/local_calendar.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from .calendar_models import (
    DEFAULT_CALENDAR,
    CalendarAccessError,
    CalendarEntry,
    CalendarError,
)

logger = logging.getLogger(__name__)


def _local_naive(value: datetime) -> datetime:
    """Aware datetimes become naive local time so both kinds compare."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class LocalCalendar:
    """
    In-process calendar implementing the CalendarAssist port.

    Access behaves like a device calendar:
    - nothing is readable or writable until request_access() granted it
    - reads without access return [] (logged), writes raise CalendarAccessError

    Entries here are independent of TaskStore.
    """

    def __init__(
        self,
        entries: Iterable[CalendarEntry] | None = None,
        *,
        grant_access: bool = True,
        calendars: Iterable[str] | None = None,
    ) -> None:
        self._entries: list[CalendarEntry] = list(entries or [])
        self._grant_access = grant_access
        self._calendars: list[str] = list(calendars or [DEFAULT_CALENDAR])
        self.access_granted = False
        self.access_error: str | None = None

    async def request_access(self) -> bool:
        self.access_granted = self._grant_access
        if self.access_granted:
            self.access_error = None
        else:
            self.access_error = "calendar access was denied or restricted."
            logger.info("Calendar access denied.")
        return self.access_granted

    def calendars(self) -> list[str]:
        if not self.access_granted:
            return []
        return list(self._calendars)

    def list_entries(
        self,
        start: datetime,
        end: datetime,
        calendars: Iterable[str] | None = None,
    ) -> list[CalendarEntry]:
        """
        Entries overlapping [start, end), sorted by start time.

        Naive and aware datetimes may be mixed; aware ones are compared in
        local time.
        """
        if not self.access_granted:
            logger.info("Calendar access not granted. Cannot fetch events.")
            return []

        start, end = _local_naive(start), _local_naive(end)
        wanted = set(calendars) if calendars is not None else None
        found = [
            e
            for e in self._entries
            if _local_naive(e.start) < end
            and _local_naive(e.end) >= start
            and (wanted is None or e.calendar in wanted)
        ]
        found.sort(key=lambda e: _local_naive(e.start))
        return found

    def upcoming(
        self,
        days: int = 7,
        calendars: Iterable[str] | None = None,
        now: datetime | None = None,
    ) -> list[CalendarEntry]:
        start = now or datetime.now()
        return self.list_entries(start, start + timedelta(days=days), calendars)

    def create_entry(
        self,
        title: str,
        start: datetime,
        end: datetime,
        notes: str | None = None,
    ) -> CalendarEntry:
        if not self.access_granted:
            raise CalendarAccessError("calendar access not granted.")
        if not title or not title.strip():
            raise CalendarError("calendar entry needs a title")
        if _local_naive(end) < _local_naive(start):
            raise CalendarError("calendar entry ends before it starts")

        entry = CalendarEntry(
            title=title.strip(),
            start=start,
            end=end,
            notes=notes,
            calendar=self._calendars[0] if self._calendars else DEFAULT_CALENDAR,
        )
        self._entries.append(entry)
        logger.debug("Calendar entry added title=%s start=%s", entry.title, entry.start)
        return entry
