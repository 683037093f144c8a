# tests/fakes.py

from __future__ import annotations

import asyncio

from event_planner.location.location_models import (
    Coordinates,
    LocationError,
    PermissionStatus,
)
from event_planner.tasks.kv_store import MemoryKeyValueStore


class FakeLocationProvider:
    """Deterministic LocationProvider; counts calls for assertions."""

    def __init__(
        self,
        coords: Coordinates | None = Coordinates(51.507351, -0.127758),
        status: PermissionStatus = PermissionStatus.GRANTED,
        error: Exception | None = None,
    ) -> None:
        self.coords = coords
        self.status = status
        self.error = error
        self.permission_requests = 0

    async def request_permission(self) -> PermissionStatus:
        self.permission_requests += 1
        return self.status

    async def current_coordinates(self) -> Coordinates:
        if self.error is not None:
            raise self.error
        if self.coords is None:
            raise LocationError("no fix")
        return self.coords


class FakeResolver:
    """
    LocationResolver returning a fixed answer.

    If `gate` is set, describe() waits for it, which lets a test change the
    session while a lookup is still in flight.
    """

    def __init__(
        self,
        text: str | None = "10 Downing St, London, England",
        error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.text = text
        self.error = error
        self.gate = gate
        self.calls: list[Coordinates] = []

    async def describe(self, coords: Coordinates) -> str | None:
        self.calls.append(coords)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.text


class FailingKeyValueStore(MemoryKeyValueStore):
    """Reads work; writes fail while `fail_writes` is True."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.fail_writes = False

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        super().set(key, value)
