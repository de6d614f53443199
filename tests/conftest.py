"""
tests.conftest

In-memory stand-ins for the Geocoding Service and Routing Services.

Responsibilities:
- Deterministic coordinates/durations so results can be asserted exactly.
- Gates that hold calls to a destination open until released, to force out-of-order
  completion between recompute generations.
"""

from __future__ import annotations

import asyncio

import pytest

from commute_planner.domain.errors import ServiceUnavailable
from commute_planner.domain.models import Coordinate, RegionBounds
from commute_planner.engine.geocoding import GeocodingResolver
from commute_planner.engine.routing import RouteEstimator
from commute_planner.engine.throttle import CallThrottle
from commute_planner.service_clients.base import (
    DrivingRoute,
    GeocodeCandidate,
    TransitItinerary,
    TransitLeg,
    TransitStep,
)
from commute_planner.services.planner_service import PlannerService

REGION = "Sydney, Australia"
SYDNEY = RegionBounds(min_latitude=-34.5, max_latitude=-33.0, min_longitude=150.0, max_longitude=151.7)

OFFICE_A = Coordinate(-33.8688, 151.2093)
OFFICE_B = Coordinate(-33.8150, 151.0011)

ADDRESSES: dict[str, Coordinate] = {
    "1 George St": Coordinate(-33.8600, 151.2100),
    "2 Pitt St": Coordinate(-33.8700, 151.2080),
    "3 Oxford St": Coordinate(-33.8800, 151.2200),
    "10 Client Rd": Coordinate(-33.7900, 151.1800),
    "99 Queen St Melbourne": Coordinate(-37.8136, 144.9631),
}


def drive_seconds(origin: Coordinate, destination: Coordinate) -> float:
    # 1 minute per 0.001 degrees of Manhattan distance, plus two minutes.
    span = abs(origin.latitude - destination.latitude) + abs(
        origin.longitude - destination.longitude
    )
    return 120 + span * 60_000


def drive_meters(origin: Coordinate, destination: Coordinate) -> float:
    span = abs(origin.latitude - destination.latitude) + abs(
        origin.longitude - destination.longitude
    )
    return span * 111_000


class FakeGeocoder:
    def __init__(
        self,
        table: dict[str, Coordinate] | None = None,
        *,
        failing: set[str] | None = None,
    ) -> None:
        self.table = dict(ADDRESSES if table is None else table)
        self.failing = failing or set()
        self.queries: list[str] = []

    async def query(self, text: str) -> list[GeocodeCandidate]:
        self.queries.append(text)
        address = text.removesuffix(f", {REGION}")
        if address in self.failing:
            raise ServiceUnavailable("fake-geocoder", "boom")
        point = self.table.get(address)
        if point is None:
            return []
        return [GeocodeCandidate(coordinate=point, confidence=0.9)]


class _Gated:
    def __init__(self) -> None:
        self.gates: dict[Coordinate, asyncio.Event] = {}
        self.failing_destinations: set[Coordinate] = set()
        self.calls: list[tuple[Coordinate, Coordinate]] = []

    def gate(self, destination: Coordinate) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[destination] = event
        return event

    async def _enter(self, origin: Coordinate, destination: Coordinate) -> None:
        self.calls.append((origin, destination))
        gate = self.gates.get(destination)
        if gate is not None:
            await gate.wait()
        if destination in self.failing_destinations:
            raise ServiceUnavailable("fake-router", "down")


class FakeDriving(_Gated):
    async def query(self, origin: Coordinate, destination: Coordinate) -> list[DrivingRoute]:
        await self._enter(origin, destination)
        return [
            DrivingRoute(
                duration_seconds=drive_seconds(origin, destination),
                distance_meters=drive_meters(origin, destination),
            )
        ]


class FakeTransit(_Gated):
    def __init__(self) -> None:
        super().__init__()
        self.empty = False

    async def query(self, origin: Coordinate, destination: Coordinate) -> list[TransitItinerary]:
        await self._enter(origin, destination)
        if self.empty:
            return []
        leg = TransitLeg(
            duration_seconds=drive_seconds(origin, destination) * 2,
            distance_meters=drive_meters(origin, destination) * 1.2,
            steps=(
                TransitStep(travel_mode="WALKING"),
                TransitStep(
                    travel_mode="TRANSIT",
                    line="T1",
                    departure_stop="Central",
                    arrival_stop="Town Hall",
                ),
            ),
        )
        return [TransitItinerary(legs=(leg,))]


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def driving() -> FakeDriving:
    return FakeDriving()


@pytest.fixture
def transit() -> FakeTransit:
    return FakeTransit()


@pytest.fixture
def resolver(geocoder: FakeGeocoder) -> GeocodingResolver:
    return GeocodingResolver(service=geocoder, bounds=SYDNEY)


@pytest.fixture
def estimator(driving: FakeDriving, transit: FakeTransit) -> RouteEstimator:
    return RouteEstimator(driving=driving, transit=transit)


@pytest.fixture
def throttle() -> CallThrottle:
    # Wide enough that gated calls of one generation never starve another.
    return CallThrottle(pool_size=32, min_interval=0.0)


@pytest.fixture
def planner(resolver: GeocodingResolver, estimator: RouteEstimator) -> PlannerService:
    return PlannerService(
        resolver=resolver,
        estimator=estimator,
        routing_throttle=CallThrottle(pool_size=32, min_interval=0.0),
        geocoding_throttle=CallThrottle(pool_size=4, min_interval=0.0),
        default_office=OFFICE_A,
        region_hint=REGION,
    )


ROSTER_ROWS: list[list[str]] = [
    ["address", "name", "client office"],
    ["1 George St", "Ada", "10 Client Rd"],
    ["2 Pitt St", "", ""],
    [""],
    ["3 Oxford St", "Grace"],
    ["Nowhere Lane", "Lost", ""],
]
