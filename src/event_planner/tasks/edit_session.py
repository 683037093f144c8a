# src/event_planner/tasks/edit_session.py

"""
Staged editing of a single task.

A TaskEditSession holds a working copy of one record (or blank fields for a
new one) and writes it back with a single TaskStore call on commit.

Location autofill is a two-phase value:
  IDLE -> REQUESTED -> RESOLVED | FAILED | CANCELLED
Each request gets a token; a result is applied only if the session is still
open and the token is still the current one, so late answers from the
resolver never overwrite newer input.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from enum import StrEnum

from ..core.ports import LocationProvider, LocationResolver
from ..location.location_models import (
    Coordinates,
    LocationDenied,
    LocationError,
    format_coordinates,
    not_found_text,
)
from .task_models import TaskRecord
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class SessionClosedError(RuntimeError):
    """The session was already committed, discarded or deleted."""


class LocationFetchState(StrEnum):
    IDLE = "idle"
    REQUESTED = "requested"
    RESOLVED = "resolved"
    FAILED = "failed"
    CANCELLED = "cancelled"


class TaskEditSession:
    def __init__(self, existing: TaskRecord | None = None) -> None:
        self.existing = existing

        self.title: str = ""
        self.notes: str = ""
        self.location_text: str = ""
        self.due_date: datetime | None = None
        self.include_due_date: bool = False

        self.location_state = LocationFetchState.IDLE
        self.location_error: str | None = None
        self.location_autofilled: bool = False

        self._request_token = 0
        self._closed = False

        if existing is not None:
            self.title = existing.title
            self.notes = existing.notes or ""
            self.location_text = existing.location_details or ""
            self.due_date = existing.due_date
            self.include_due_date = existing.due_date is not None
            self.location_autofilled = bool(existing.location_details)

    @classmethod
    def begin(cls, existing: TaskRecord | None = None) -> TaskEditSession:
        return cls(existing)

    # ---- state ----

    @property
    def is_editing(self) -> bool:
        return self.existing is not None

    @property
    def is_open(self) -> bool:
        return not self._closed

    @property
    def is_fetching_location(self) -> bool:
        return self.location_state is LocationFetchState.REQUESTED

    @property
    def can_commit(self) -> bool:
        return bool(self.title.strip())

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("edit session is closed")

    def _close(self) -> None:
        self.cancel_location_fetch()
        self._closed = True

    # ---- staged input ----

    def set_location_text(self, text: str) -> None:
        """Manual entry; cancels any pending autofill."""
        self._ensure_open()
        if self.is_fetching_location:
            self.cancel_location_fetch()
        self.location_text = text
        self.location_autofilled = False

    def set_due_date(self, value: datetime | None, *, include: bool = True) -> None:
        self._ensure_open()
        self.due_date = value
        self.include_due_date = include

    # ---- location autofill ----

    def cancel_location_fetch(self) -> None:
        if self.location_state is LocationFetchState.REQUESTED:
            self.location_state = LocationFetchState.CANCELLED
            logger.debug("Location fetch cancelled token=%s", self._request_token)
        self._request_token += 1

    def _is_current(self, token: int) -> bool:
        return not self._closed and token == self._request_token

    def _fail(self, token: int, reason: str) -> None:
        if not self._is_current(token):
            return
        self.location_state = LocationFetchState.FAILED
        self.location_error = reason
        self.location_autofilled = False

    def _resolve(self, token: int, text: str) -> None:
        if not self._is_current(token):
            logger.debug("Dropping stale location result token=%s", token)
            return
        self.location_text = text
        self.location_state = LocationFetchState.RESOLVED
        self.location_error = None
        self.location_autofilled = True

    async def fetch_location(
        self,
        provider: LocationProvider,
        resolver: LocationResolver,
        *,
        timeout: float | None = None,
    ) -> LocationFetchState:
        """
        Fill location_text from the device position.

        Permission refused or no position -> FAILED (text left empty for
        manual entry). Any resolver error -> raw coordinates. Nothing found ->
        "Address not found. Lat: .., Lon: ..".
        """
        self._ensure_open()

        self._request_token += 1
        token = self._request_token
        self.location_state = LocationFetchState.REQUESTED
        self.location_error = None
        self.location_autofilled = False
        self.location_text = ""

        try:
            status = await provider.request_permission()
        except LocationError as e:
            self._fail(token, str(e) or "location permission request failed")
            return self.location_state
        except Exception as e:
            logger.warning("Location permission request crashed: %r", e, exc_info=True)
            self._fail(token, "location permission request failed")
            return self.location_state

        if not self._is_current(token):
            return self.location_state
        if not status.is_granted:
            logger.info("Location permission not granted status=%s", status)
            self._fail(token, f"location access {status.value}")
            return self.location_state

        try:
            coords = await asyncio.wait_for(provider.current_coordinates(), timeout)
        except LocationDenied as e:
            self._fail(token, str(e) or "location access denied")
            return self.location_state
        except (LocationError, asyncio.TimeoutError) as e:
            logger.info("Failed to get location: %r", e)
            self._fail(token, str(e) or "location unavailable")
            return self.location_state
        except Exception as e:
            logger.warning("Location provider crashed: %r", e, exc_info=True)
            self._fail(token, "location unavailable")
            return self.location_state

        if not self._is_current(token):
            return self.location_state

        self._resolve(token, await self._describe(resolver, coords, timeout))
        return self.location_state

    @staticmethod
    async def _describe(
        resolver: LocationResolver,
        coords: Coordinates,
        timeout: float | None,
    ) -> str:
        try:
            text = await asyncio.wait_for(resolver.describe(coords), timeout)
        except (LocationError, asyncio.TimeoutError) as e:
            logger.info("Reverse geocoding error: %r", e)
            return format_coordinates(coords)
        except Exception as e:
            logger.warning("Reverse geocoding crashed: %r", e, exc_info=True)
            return format_coordinates(coords)

        if text is None:
            return not_found_text(coords)
        text = text.strip()
        return text or format_coordinates(coords)

    # ---- finish ----

    def commit(self, store: TaskStore) -> TaskRecord | None:
        """
        Write the staged fields into the store.

        Returns the stored record, or None when the store ignored it
        (blank title, or the record was deleted meanwhile).
        """
        self._ensure_open()
        self._close()

        final_due = self.due_date if self.include_due_date else None
        final_location = self.location_text.strip() or None
        final_notes = self.notes if self.notes.strip() else None

        if self.existing is not None:
            updated = replace(
                self.existing,
                title=self.title,
                notes=final_notes,
                due_date=final_due,
                location_details=final_location,
            )
            return updated if store.update(updated) else None

        return store.add(
            self.title,
            notes=final_notes,
            due_date=final_due,
            location_details=final_location,
        )

    def discard(self) -> None:
        self._ensure_open()
        self._close()

    def delete(self, store: TaskStore) -> bool:
        self._ensure_open()
        if self.existing is None:
            return False
        self._close()
        return store.delete(self.existing.id)
