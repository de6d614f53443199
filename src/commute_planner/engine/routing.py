"""
commute_planner.engine.routing

Route Estimator: (origin, destination, mode) → CommuteLeg.

Responsibilities:
- Driving: duration/distance of the best route.
- Transit: duration/distance of the first leg of the first itinerary, plus a readable
  summary of the transit steps.
- Absorb every service failure into an unresolved leg.
"""

from __future__ import annotations

import asyncio

from commute_planner.domain.errors import NoRoute, ServiceUnavailable
from commute_planner.domain.models import CommuteLeg, Coordinate, LegFailure, TravelMode
from commute_planner.observability.logging import get_logger
from commute_planner.service_clients.base import (
    DrivingRoutingService,
    TransitLeg,
    TransitRoutingService,
)

log = get_logger(__name__)


def _minutes(seconds: float) -> float:
    return float(round(seconds / 60))


def _km(meters: float) -> float:
    return round(meters / 1000, 1)


def transit_summary(leg: TransitLeg) -> str | None:
    parts = [
        f"{s.line} ({s.departure_stop} → {s.arrival_stop})"
        for s in leg.steps
        if s.travel_mode.upper() == "TRANSIT" and s.line
    ]
    return ", ".join(parts) or None


class RouteEstimator:
    def __init__(
        self,
        *,
        driving: DrivingRoutingService,
        transit: TransitRoutingService,
        timeout: float | None = None,
    ) -> None:
        self._driving = driving
        self._transit = transit
        self._timeout = timeout

    async def estimate(
        self, origin: Coordinate, destination: Coordinate, mode: TravelMode
    ) -> CommuteLeg:
        try:
            if mode is TravelMode.driving:
                leg = await asyncio.wait_for(self._drive(origin, destination), self._timeout)
            else:
                leg = await asyncio.wait_for(self._ride(origin, destination), self._timeout)
        except NoRoute:
            log.info("leg.failed", mode=mode.value, reason=LegFailure.no_route.value)
            return CommuteLeg.unresolved(mode, LegFailure.no_route)
        except (ServiceUnavailable, TimeoutError) as e:
            log.warning(
                "leg.failed",
                mode=mode.value,
                reason=LegFailure.service_unavailable.value,
                error=str(e) or type(e).__name__,
            )
            return CommuteLeg.unresolved(mode, LegFailure.service_unavailable)
        except Exception:
            # A faulty adapter must not sink the other legs of the generation.
            log.error(
                "leg.failed",
                mode=mode.value,
                reason=LegFailure.service_unavailable.value,
                exc_info=True,
            )
            return CommuteLeg.unresolved(mode, LegFailure.service_unavailable)

        log.debug(
            "leg.resolved",
            mode=mode.value,
            duration_minutes=leg.duration_minutes,
            distance_km=leg.distance_km,
        )
        return leg

    async def _drive(self, origin: Coordinate, destination: Coordinate) -> CommuteLeg:
        routes = await self._driving.query(origin, destination)
        if not routes:
            raise NoRoute("no driving route")
        best = routes[0]
        return CommuteLeg(
            mode=TravelMode.driving,
            duration_minutes=_minutes(best.duration_seconds),
            distance_km=_km(best.distance_meters),
        )

    async def _ride(self, origin: Coordinate, destination: Coordinate) -> CommuteLeg:
        itineraries = await self._transit.query(origin, destination)
        if not itineraries or not itineraries[0].legs:
            raise NoRoute("no transit itinerary")
        first = itineraries[0].legs[0]
        return CommuteLeg(
            mode=TravelMode.transit,
            duration_minutes=_minutes(first.duration_seconds),
            distance_km=_km(first.distance_meters),
            transit_summary=transit_summary(first),
        )


# --- Module Notes -----------------------------------------------------------
# Values are rounded the way they are displayed: whole minutes and 0.1 km.
