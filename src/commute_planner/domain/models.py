"""
commute_planner.domain.models

Core value types shared by every layer of the engine.

Responsibilities:
- Coordinates and service-region bounds.
- Roster entries (Employee) with their one-time geocoded coordinates.
- Commute legs/results, office location, aggregate statistics and commit records.

All types are immutable; "unresolved" is always represented as `None`, never zero.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TravelMode(enum.StrEnum):
    driving = "driving"
    transit = "transit"


class OfficeSource(enum.StrEnum):
    # How the current office coordinate was chosen.
    manual_search = "manual-search"
    drag = "drag"
    optimized = "optimized"
    default = "default"


class GeocodeFailureReason(enum.StrEnum):
    not_found = "not_found"
    service_error = "service_error"


class LegFailure(enum.StrEnum):
    no_route = "no_route"
    service_unavailable = "service_unavailable"


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")

    def as_lat_lng(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def as_lng_lat(self) -> str:
        return f"{self.longitude},{self.latitude}"


@dataclass(frozen=True, slots=True)
class RegionBounds:
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def contains(self, point: Coordinate) -> bool:
        return (
            self.min_latitude <= point.latitude <= self.max_latitude
            and self.min_longitude <= point.longitude <= self.max_longitude
        )


@dataclass(frozen=True, slots=True)
class Employee:
    """
    One roster row. Coordinates are filled in once by the roster geocoding pass;
    a re-upload replaces the whole roster rather than mutating employees.
    """

    id: int
    name: str
    home_address: str
    home_coordinate: Coordinate | None = None
    client_office_address: str | None = None
    client_office_coordinate: Coordinate | None = None
    # e.g. ("home:not_found", "client_office:out_of_service_region")
    geocode_issues: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.client_office_address and self.client_office_coordinate is not None:
            raise ValueError("employee without a client office address cannot have its coordinate")

    @property
    def has_client_office(self) -> bool:
        return bool(self.client_office_address)

    @property
    def is_resolved(self) -> bool:
        return self.home_coordinate is not None


@dataclass(frozen=True, slots=True)
class CommuteLeg:
    mode: TravelMode
    duration_minutes: float | None = None
    distance_km: float | None = None
    transit_summary: str | None = None
    failure: LegFailure | None = None

    @property
    def resolved(self) -> bool:
        return self.duration_minutes is not None

    @classmethod
    def unresolved(cls, mode: TravelMode, failure: LegFailure) -> CommuteLeg:
        return cls(mode=mode, failure=failure)


@dataclass(frozen=True, slots=True)
class LegPair:
    driving: CommuteLeg
    transit: CommuteLeg

    def legs(self) -> tuple[CommuteLeg, CommuteLeg]:
        return (self.driving, self.transit)


@dataclass(frozen=True, slots=True)
class CommuteResult:
    employee_id: int
    main_office: LegPair
    client_office: LegPair | None = None


@dataclass(frozen=True, slots=True)
class OfficeLocation:
    coordinate: Coordinate
    source: OfficeSource = OfficeSource.default


@dataclass(frozen=True, slots=True)
class Statistics:
    employee_count: int
    average_driving_minutes: float | None
    average_transit_minutes: float | None
    average_client_driving_minutes: float | None = None
    average_client_transit_minutes: float | None = None


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """
    Published by the orchestrator when a generation wins the commit check.
    """

    generation: int
    office: OfficeLocation
    results: tuple[CommuteResult, ...]
    statistics: Statistics
    service_outage: bool = False


# --- Module Notes -----------------------------------------------------------
# `frozen=True` keeps snapshots safe to share between overlapping recompute runs:
# a run captures tuples of these values and never sees later roster/office changes.
