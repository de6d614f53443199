"""
commute_planner.services.planner_service

Planner service: the caller that owns the roster and the office location.

Responsibilities:
- Import a roster (parse → geocode once → replace the Roster Store) and trigger recompute.
- Change the office location (drag, address search, optimizer) and trigger recompute.
- Keep the latest committed result set and present it with statistics and ranking.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

import httpx

from commute_planner.domain.errors import NoCoordinates
from commute_planner.domain.models import (
    CommitRecord,
    CommuteResult,
    Coordinate,
    Employee,
    OfficeLocation,
    OfficeSource,
)
from commute_planner.engine.aggregate import rank
from commute_planner.engine.geocoding import GeocodingResolver
from commute_planner.engine.optimizer import optimal_location
from commute_planner.engine.roster import RosterStore, geocode_roster, parse_roster_rows
from commute_planner.engine.routing import RouteEstimator
from commute_planner.engine.throttle import CallThrottle
from commute_planner.observability.logging import get_logger
from commute_planner.orchestrator.recompute import RecomputeOrchestrator, TriggerReason
from commute_planner.service_clients.mapbox import MapboxDrivingClient, MapboxGeocodingClient
from commute_planner.service_clients.transit import TransitDirectionsClient
from commute_planner.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RosterImportSummary:
    employee_count: int
    resolved_count: int
    unresolved_ids: tuple[int, ...]
    lookups: int
    superseded: bool = False


@dataclass(frozen=True, slots=True)
class PlannerView:
    office: OfficeLocation
    employees: tuple[Employee, ...]
    commit: CommitRecord | None
    pending: bool
    suggested_office: Coordinate | None

    @property
    def status(self) -> str:
        if self.commit is None:
            return "pending" if self.pending else "no_data"
        if self.commit.service_outage:
            return "service_unavailable"
        if not self.commit.results:
            return "no_data"
        return "ok"

    @property
    def ranking(self) -> list[CommuteResult]:
        if self.commit is None:
            return []
        return rank(self.commit.results)


class PlannerService:
    def __init__(
        self,
        *,
        resolver: GeocodingResolver,
        estimator: RouteEstimator,
        routing_throttle: CallThrottle,
        geocoding_throttle: CallThrottle,
        default_office: Coordinate,
        region_hint: str | None = None,
        reject_out_of_region: bool = False,
    ) -> None:
        self._resolver = resolver
        self._geocoding_throttle = geocoding_throttle
        self._region_hint = region_hint
        self._reject_out_of_region = reject_out_of_region

        self._roster = RosterStore()
        self._office = OfficeLocation(coordinate=default_office, source=OfficeSource.default)
        self._imports = itertools.count(1)
        self._latest_import = 0
        self._orchestrator = RecomputeOrchestrator(estimator=estimator, throttle=routing_throttle)

    @property
    def office(self) -> OfficeLocation:
        return self._office

    @property
    def roster(self) -> RosterStore:
        return self._roster

    @property
    def orchestrator(self) -> RecomputeOrchestrator:
        return self._orchestrator

    async def import_roster(self, rows: Iterable[Sequence[str | None]]) -> RosterImportSummary:
        token = self._latest_import = next(self._imports)
        employees = parse_roster_rows(rows)
        geocoded, report = await geocode_roster(
            employees,
            resolver=self._resolver,
            throttle=self._geocoding_throttle,
            region_hint=self._region_hint,
            reject_out_of_region=self._reject_out_of_region,
        )
        summary = RosterImportSummary(
            employee_count=len(geocoded),
            resolved_count=report.resolved,
            unresolved_ids=report.unresolved,
            lookups=report.lookups,
        )

        # A newer upload started while this one was geocoding; it owns the roster now.
        if token != self._latest_import:
            log.info("roster.superseded", import_token=token, latest=self._latest_import)
            return replace(summary, superseded=True)

        self._roster.replace(geocoded)
        self._trigger(TriggerReason.roster_geocoded)
        return summary

    def move_office(
        self, coordinate: Coordinate, source: OfficeSource = OfficeSource.drag
    ) -> OfficeLocation:
        self._office = OfficeLocation(coordinate=coordinate, source=source)
        self._trigger(TriggerReason.office_changed)
        return self._office

    async def search_office(self, address: str) -> OfficeLocation:
        """
        Raises `AddressNotFound` / `ServiceUnavailable`; the office is unchanged on failure.
        """

        outcome = await self._resolver.resolve(address, self._region_hint)
        coordinate = outcome.raise_for_failure()
        return self.move_office(coordinate, OfficeSource.manual_search)

    def optimize(self) -> OfficeLocation:
        """
        Move the office to the roster centroid. Raises `NoCoordinates`.
        """

        return self.move_office(optimal_location(self._roster.employees), OfficeSource.optimized)

    def retry(self) -> None:
        self._trigger(TriggerReason.manual_retry)

    def view(self) -> PlannerView:
        try:
            suggested: Coordinate | None = optimal_location(self._roster.employees)
        except NoCoordinates:
            suggested = None
        return PlannerView(
            office=self._office,
            employees=self._roster.employees,
            commit=self._orchestrator.last_commit,
            pending=self._orchestrator.busy,
            suggested_office=suggested,
        )

    async def wait_idle(self) -> None:
        await self._orchestrator.wait_idle()

    def _trigger(self, reason: TriggerReason) -> None:
        # An empty roster still runs: its empty commit replaces results of the old inputs.
        self._orchestrator.trigger(
            employees=self._roster.resolved(), office=self._office, reason=reason
        )


def build_planner(*, settings: Settings, http: httpx.AsyncClient) -> PlannerService:
    """
    Composition root for the engine: wires HTTP adapters and throttles from settings.
    """

    resolver = GeocodingResolver(
        service=MapboxGeocodingClient(
            http=http,
            access_token=settings.mapbox_access_token,
            base_url=settings.mapbox_base_url,
        ),
        bounds=settings.region_bounds(),
    )
    estimator = RouteEstimator(
        driving=MapboxDrivingClient(
            http=http,
            access_token=settings.mapbox_access_token,
            base_url=settings.mapbox_base_url,
        ),
        transit=TransitDirectionsClient(
            http=http,
            url=settings.transit_directions_url,
            api_key=settings.google_maps_api_key,
        ),
        timeout=settings.http_timeout_seconds,
    )
    return PlannerService(
        resolver=resolver,
        estimator=estimator,
        routing_throttle=CallThrottle(
            pool_size=settings.routing_pool_size,
            min_interval=settings.routing_min_interval_seconds,
        ),
        geocoding_throttle=CallThrottle(
            pool_size=settings.geocoding_pool_size,
            min_interval=settings.geocoding_min_interval_seconds,
        ),
        default_office=settings.default_office(),
        region_hint=settings.region_hint,
        reject_out_of_region=settings.reject_out_of_region,
    )


# --- Module Notes -----------------------------------------------------------
# This service is the only writer of the roster and the office location; the orchestrator
# receives both by value on every trigger.
