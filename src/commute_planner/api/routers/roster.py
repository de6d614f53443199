"""
commute_planner.api.routers.roster

Roster endpoints.

Responsibilities:
- Accept an already-split roster (header row first) and geocode it.
- List the current roster with resolution flags.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from starlette.status import HTTP_202_ACCEPTED

from commute_planner.api.deps import planner_dep
from commute_planner.api.schemas import CoordinateOut
from commute_planner.services.planner_service import PlannerService

router = APIRouter(prefix="/v1/roster", tags=["roster"])


class RosterUploadRequest(BaseModel):
    # Rows of (home_address, name, client_office_address?); the first row is a header.
    rows: list[list[str | None]] = Field(min_length=1)


class RosterUploadResponse(BaseModel):
    employee_count: int
    resolved_count: int
    unresolved_ids: list[int]
    lookups: int
    superseded: bool


class EmployeeOut(BaseModel):
    id: int
    name: str
    home_address: str
    home: CoordinateOut | None
    client_office_address: str | None
    client_office: CoordinateOut | None
    resolved: bool
    geocode_issues: list[str]


@router.post("", response_model=RosterUploadResponse, status_code=HTTP_202_ACCEPTED)
async def upload_roster(
    body: RosterUploadRequest,
    planner: PlannerService = Depends(planner_dep),
) -> RosterUploadResponse:
    # Geocoding completes before we answer; the commute recompute runs in the background.
    summary = await planner.import_roster(body.rows)
    return RosterUploadResponse(
        employee_count=summary.employee_count,
        resolved_count=summary.resolved_count,
        unresolved_ids=list(summary.unresolved_ids),
        lookups=summary.lookups,
        superseded=summary.superseded,
    )


@router.get("", response_model=list[EmployeeOut])
async def list_roster(planner: PlannerService = Depends(planner_dep)) -> list[EmployeeOut]:
    return [
        EmployeeOut(
            id=e.id,
            name=e.name,
            home_address=e.home_address,
            home=CoordinateOut.of(e.home_coordinate),
            client_office_address=e.client_office_address,
            client_office=CoordinateOut.of(e.client_office_coordinate),
            resolved=e.is_resolved,
            geocode_issues=list(e.geocode_issues),
        )
        for e in planner.roster.employees
    ]
