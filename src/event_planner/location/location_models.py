# src/event_planner/location/location_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class LocationError(RuntimeError):
    """Device location or reverse geocoding failed."""


class LocationDenied(LocationError):
    """User (or policy) refused location access."""


class PermissionStatus(StrEnum):
    NOT_DETERMINED = "not_determined"
    GRANTED = "granted"
    DENIED = "denied"
    RESTRICTED = "restricted"

    @property
    def is_granted(self) -> bool:
        return self is PermissionStatus.GRANTED


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class Placemark:
    """Subset of a reverse-geocoding result used to build a place label."""

    name: str | None = None
    thoroughfare: str | None = None
    locality: str | None = None
    administrative_area: str | None = None


def format_coordinates(coords: Coordinates) -> str:
    return f"Lat: {coords.latitude:.4f}, Lon: {coords.longitude:.4f}"


def not_found_text(coords: Coordinates) -> str:
    return f"Address not found. {format_coordinates(coords)}"


def describe_placemark(placemark: Placemark) -> str:
    """
    Build "Name, City, State" from a placemark.

    The name is skipped when it is an "Unnamed Road" label; the street is
    used instead. Returns "" when nothing usable is present.
    """
    parts: list[str] = []
    if placemark.name and "Unnamed Road" not in placemark.name:
        parts.append(placemark.name)
    elif placemark.thoroughfare:
        parts.append(placemark.thoroughfare)

    if placemark.locality:
        parts.append(placemark.locality)
    if placemark.administrative_area:
        parts.append(placemark.administrative_area)

    cleaned = [p.strip() for p in parts if p and p.strip()]
    return ", ".join(cleaned).strip(" ,")
