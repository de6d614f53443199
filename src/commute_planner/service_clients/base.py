"""
commute_planner.service_clients.base

Abstract capabilities the engine depends on.

Responsibilities:
- Define `Protocol` interfaces for the Geocoding Service and both Routing Services.
- Define the typed payloads those services return to the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from commute_planner.domain.models import Coordinate


@dataclass(frozen=True, slots=True)
class GeocodeCandidate:
    coordinate: Coordinate
    confidence: float = 1.0
    label: str | None = None


@dataclass(frozen=True, slots=True)
class DrivingRoute:
    duration_seconds: float
    distance_meters: float


@dataclass(frozen=True, slots=True)
class TransitStep:
    travel_mode: str
    line: str | None = None
    departure_stop: str | None = None
    arrival_stop: str | None = None


@dataclass(frozen=True, slots=True)
class TransitLeg:
    duration_seconds: float
    distance_meters: float
    steps: tuple[TransitStep, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class TransitItinerary:
    legs: tuple[TransitLeg, ...]


class GeocodingService(Protocol):
    async def query(self, text: str) -> list[GeocodeCandidate]: ...


class DrivingRoutingService(Protocol):
    async def query(self, origin: Coordinate, destination: Coordinate) -> list[DrivingRoute]: ...


class TransitRoutingService(Protocol):
    async def query(
        self, origin: Coordinate, destination: Coordinate
    ) -> list[TransitItinerary]: ...


# --- Module Notes -----------------------------------------------------------
# Implementations raise `ServiceUnavailable` for transport/status failures and return an
# empty list when the service was reached but found nothing.
