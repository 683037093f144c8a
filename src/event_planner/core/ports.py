# src/event_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and device services (location, calendar) swappable
and makes testing easier.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..calendar_assist.calendar_models import CalendarEntry
    from ..location.location_models import Coordinates, PermissionStatus


class KeyValueStore(Protocol):
    """Durable string slots addressed by a fixed key."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class LocationProvider(Protocol):
    """
    Device-side location access.

    current_coordinates() raises LocationError (or LocationDenied) on failure.
    """

    async def request_permission(self) -> PermissionStatus: ...
    async def current_coordinates(self) -> Coordinates: ...


class LocationResolver(Protocol):
    """
    Reverse geocoder: coordinates -> human-readable place.

    Returns None / "" when nothing was found; raises LocationError on failure.
    """

    async def describe(self, coords: Coordinates) -> str | None: ...


class CalendarAssist(Protocol):
    async def request_access(self) -> bool: ...

    def calendars(self) -> list[str]: ...

    def list_entries(
            self,
            start: datetime,
            end: datetime,
            calendars: Iterable[str] | None = None,
    ) -> list[CalendarEntry]: ...

    def upcoming(
            self,
            days: int = 7,
            calendars: Iterable[str] | None = None,
            now: datetime | None = None,
    ) -> list[CalendarEntry]: ...

    def create_entry(
            self,
            title: str,
            start: datetime,
            end: datetime,
            notes: str | None = None,
    ) -> CalendarEntry: ...
