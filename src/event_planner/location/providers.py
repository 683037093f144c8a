# src/event_planner/location/providers.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from .location_models import (
    Coordinates,
    LocationDenied,
    PermissionStatus,
    Placemark,
    describe_placemark,
)

logger = logging.getLogger(__name__)

PlacemarkLookup = Callable[[Coordinates], Awaitable[list[Placemark]]]


class FixedLocationProvider:
    """
    Location provider backed by a configured "home" position.

    Used on machines without a location service. When no coordinates are
    configured, permission is reported as RESTRICTED.
    """

    def __init__(self, coords: Coordinates | None) -> None:
        self._coords = coords

    @classmethod
    def from_settings(cls, settings) -> FixedLocationProvider:
        lat = getattr(settings, "home_latitude", None)
        lon = getattr(settings, "home_longitude", None)
        if lat is None or lon is None:
            return cls(None)
        return cls(Coordinates(latitude=float(lat), longitude=float(lon)))

    async def request_permission(self) -> PermissionStatus:
        if self._coords is None:
            return PermissionStatus.RESTRICTED
        return PermissionStatus.GRANTED

    async def current_coordinates(self) -> Coordinates:
        if self._coords is None:
            raise LocationDenied("no home location configured")
        return self._coords


class PlacemarkResolver:
    """
    LocationResolver over a placemark lookup.

    Only the first placemark is used. No placemarks -> None (not found);
    lookup errors propagate to the caller.
    """

    def __init__(self, lookup: PlacemarkLookup) -> None:
        self._lookup = lookup

    async def describe(self, coords: Coordinates) -> str | None:
        placemarks = await self._lookup(coords)
        if not placemarks:
            logger.debug("No placemarks for %s", coords)
            return None
        return describe_placemark(placemarks[0])
