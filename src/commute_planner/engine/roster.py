"""
commute_planner.engine.roster

Roster import, roster geocoding and the Roster Store.

Responsibilities:
- Turn imported rows `(home_address, name, client_office_address?)` into employees.
- Geocode each distinct address once per import, under a call throttle.
- Hold the current roster as an immutable snapshot (single writer, many readers).
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from commute_planner.domain.models import Employee, GeocodeFailureReason
from commute_planner.engine.geocoding import GeocodeOutcome, GeocodingResolver
from commute_planner.engine.throttle import CallThrottle
from commute_planner.observability.logging import get_logger

log = get_logger(__name__)


def parse_roster_rows(rows: Iterable[Sequence[str | None]]) -> list[Employee]:
    """
    First row is a header. Blank rows are skipped before numbering, so ids and the
    `Employee <n>` placeholder follow the order of non-blank rows.
    """

    employees: list[Employee] = []
    body = list(rows)[1:]
    for row in body:
        cells = [(c or "").strip() for c in row]
        if not any(cells):
            continue
        index = len(employees)
        cells += [""] * (3 - len(cells))
        home, name, client = cells[:3]
        employees.append(
            Employee(
                id=index,
                name=name or f"Employee {index + 1}",
                home_address=home,
                client_office_address=client or None,
            )
        )
    return employees


@dataclass(frozen=True, slots=True)
class RosterGeocodeReport:
    lookups: int
    resolved: int
    unresolved: tuple[int, ...]


def _issues(field_name: str, outcome: GeocodeOutcome) -> list[str]:
    out: list[str] = []
    if outcome.failure is not None:
        out.append(f"{field_name}:{outcome.failure.value}")
    if outcome.out_of_region:
        out.append(f"{field_name}:out_of_service_region")
    return out


async def geocode_roster(
    employees: Sequence[Employee],
    *,
    resolver: GeocodingResolver,
    throttle: CallThrottle,
    region_hint: str | None,
    reject_out_of_region: bool = False,
) -> tuple[list[Employee], RosterGeocodeReport]:
    """
    Resolve home and client office addresses. Identical address strings (across both
    fields and all employees) share a single lookup.
    """

    distinct: dict[str, None] = {}
    for e in employees:
        distinct.setdefault(e.home_address.strip(), None)
        if e.client_office_address:
            distinct.setdefault(e.client_office_address.strip(), None)

    async def _lookup(address: str) -> GeocodeOutcome:
        if not address:
            return GeocodeOutcome(address=address, failure=GeocodeFailureReason.not_found)
        return await throttle.run(lambda: resolver.resolve(address, region_hint))

    addresses = list(distinct)
    outcomes = dict(zip(addresses, await asyncio.gather(*(_lookup(a) for a in addresses))))

    def _point(outcome: GeocodeOutcome):
        if reject_out_of_region and outcome.out_of_region:
            return None
        return outcome.coordinate

    geocoded: list[Employee] = []
    for e in employees:
        home = outcomes[e.home_address.strip()]
        issues = _issues("home", home)
        client_point = None
        if e.client_office_address:
            client = outcomes[e.client_office_address.strip()]
            issues += _issues("client_office", client)
            client_point = _point(client)
        geocoded.append(
            replace(
                e,
                home_coordinate=_point(home),
                client_office_coordinate=client_point,
                geocode_issues=tuple(issues),
            )
        )

    unresolved = tuple(e.id for e in geocoded if e.home_coordinate is None)
    report = RosterGeocodeReport(
        lookups=sum(1 for a in addresses if a),
        resolved=len(geocoded) - len(unresolved),
        unresolved=unresolved,
    )
    log.info(
        "roster.geocoded",
        employees=len(geocoded),
        lookups=report.lookups,
        resolved=report.resolved,
        unresolved=len(unresolved),
    )
    return geocoded, report


class RosterStore:
    """
    Current roster. `replace` swaps the whole snapshot; readers only ever see tuples.
    """

    def __init__(self) -> None:
        self._employees: tuple[Employee, ...] = ()
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    @property
    def employees(self) -> tuple[Employee, ...]:
        return self._employees

    def replace(self, employees: Iterable[Employee]) -> int:
        snapshot = tuple(employees)
        ids = [e.id for e in snapshot]
        if len(ids) != len(set(ids)):
            raise ValueError("employee ids must be unique")
        self._employees = snapshot
        self._version += 1
        return self._version

    def resolved(self) -> tuple[Employee, ...]:
        return tuple(e for e in self._employees if e.home_coordinate is not None)

    def unresolved(self) -> tuple[Employee, ...]:
        return tuple(e for e in self._employees if e.home_coordinate is None)

    def get(self, employee_id: int) -> Employee | None:
        for e in self._employees:
            if e.id == employee_id:
                return e
        return None


# --- Module Notes -----------------------------------------------------------
# Geocoding happens only here, once per import; office changes reuse the stored
# coordinates and go straight to the recompute orchestrator.
