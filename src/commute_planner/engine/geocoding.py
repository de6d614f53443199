"""
commute_planner.engine.geocoding

Geocoding Resolver: one address string → one coordinate.

Responsibilities:
- Qualify the address with the service region before querying.
- Take the highest-confidence candidate and check it against the region bounds.
- Report "not found" / "service error" as data, not exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass

from commute_planner.domain.errors import AddressNotFound, OutOfServiceRegion, ServiceUnavailable
from commute_planner.domain.models import Coordinate, GeocodeFailureReason, RegionBounds
from commute_planner.observability.logging import get_logger
from commute_planner.service_clients.base import GeocodingService

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GeocodeOutcome:
    address: str
    coordinate: Coordinate | None = None
    failure: GeocodeFailureReason | None = None
    warnings: tuple[Warning, ...] = ()
    # Detail of the service error, when there was one.
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.coordinate is not None

    @property
    def out_of_region(self) -> bool:
        return any(isinstance(w, OutOfServiceRegion) for w in self.warnings)

    def raise_for_failure(self) -> Coordinate:
        if self.failure is GeocodeFailureReason.service_error:
            raise ServiceUnavailable("geocoding", self.error or "unknown error")
        if self.coordinate is None:
            raise AddressNotFound(self.address)
        return self.coordinate


class GeocodingResolver:
    def __init__(self, *, service: GeocodingService, bounds: RegionBounds | None = None) -> None:
        self._service = service
        self._bounds = bounds

    async def resolve(self, address: str, region_hint: str | None = None) -> GeocodeOutcome:
        address = address.strip()
        if not address:
            return GeocodeOutcome(address=address, failure=GeocodeFailureReason.not_found)

        query = f"{address}, {region_hint}" if region_hint else address
        try:
            candidates = await self._service.query(query)
        except ServiceUnavailable as e:
            log.warning("geocode.failed", address=address, reason="service_error", error=str(e))
            return GeocodeOutcome(
                address=address, failure=GeocodeFailureReason.service_error, error=str(e)
            )

        if not candidates:
            log.info("geocode.failed", address=address, reason="not_found")
            return GeocodeOutcome(address=address, failure=GeocodeFailureReason.not_found)

        best = max(candidates, key=lambda c: c.confidence)
        point = best.coordinate
        warnings: tuple[Warning, ...] = ()
        if self._bounds is not None and not self._bounds.contains(point):
            warnings = (OutOfServiceRegion(f"{address!r} resolved outside the service region"),)
            log.warning(
                "geocode.out_of_region",
                address=address,
                latitude=point.latitude,
                longitude=point.longitude,
            )

        log.info(
            "geocode.resolved",
            address=address,
            latitude=point.latitude,
            longitude=point.longitude,
            confidence=best.confidence,
        )
        return GeocodeOutcome(address=address, coordinate=point, warnings=warnings)


# --- Module Notes -----------------------------------------------------------
# Out-of-region points are returned with a warning; whether to keep them is the
# caller's policy (see `engine.roster.geocode_roster`).
