"""
commute_planner.api.schemas

Response models shared by several routers.

Responsibilities:
- Render domain values (coordinates, office, legs, statistics) as Pydantic models.
- Keep unresolved values as `null` rather than zero.
"""

from __future__ import annotations

from pydantic import BaseModel

from commute_planner.domain.models import (
    CommuteLeg,
    Coordinate,
    LegPair,
    OfficeLocation,
    Statistics,
)
from commute_planner.engine.aggregate import commute_band


class CoordinateOut(BaseModel):
    latitude: float
    longitude: float

    @classmethod
    def of(cls, c: Coordinate | None) -> CoordinateOut | None:
        if c is None:
            return None
        return cls(latitude=c.latitude, longitude=c.longitude)


class OfficeOut(BaseModel):
    latitude: float
    longitude: float
    source: str

    @classmethod
    def of(cls, office: OfficeLocation) -> OfficeOut:
        return cls(
            latitude=office.coordinate.latitude,
            longitude=office.coordinate.longitude,
            source=office.source.value,
        )


class LegOut(BaseModel):
    mode: str
    duration_minutes: float | None
    distance_km: float | None
    transit_summary: str | None = None
    band: str | None = None
    failure: str | None = None

    @classmethod
    def of(cls, leg: CommuteLeg) -> LegOut:
        band = commute_band(leg)
        return cls(
            mode=leg.mode.value,
            duration_minutes=leg.duration_minutes,
            distance_km=leg.distance_km,
            transit_summary=leg.transit_summary,
            band=band.value if band else None,
            failure=leg.failure.value if leg.failure else None,
        )


class LegPairOut(BaseModel):
    driving: LegOut
    transit: LegOut

    @classmethod
    def of(cls, pair: LegPair | None) -> LegPairOut | None:
        if pair is None:
            return None
        return cls(driving=LegOut.of(pair.driving), transit=LegOut.of(pair.transit))


class StatisticsOut(BaseModel):
    employee_count: int
    average_driving_minutes: float | None
    average_transit_minutes: float | None
    average_client_driving_minutes: float | None
    average_client_transit_minutes: float | None

    @classmethod
    def of(cls, stats: Statistics) -> StatisticsOut:
        return cls(
            employee_count=stats.employee_count,
            average_driving_minutes=stats.average_driving_minutes,
            average_transit_minutes=stats.average_transit_minutes,
            average_client_driving_minutes=stats.average_client_driving_minutes,
            average_client_transit_minutes=stats.average_client_transit_minutes,
        )
