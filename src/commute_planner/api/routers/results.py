"""
commute_planner.api.routers.results

Committed commute results and manual recompute.

Responsibilities:
- Present the latest committed result set, ranked, with statistics and the optimizer
  suggestion.
- Let the caller retry a recomputation for the current office and roster.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from starlette.status import HTTP_202_ACCEPTED

from commute_planner.api.deps import planner_dep
from commute_planner.api.schemas import CoordinateOut, LegPairOut, OfficeOut, StatisticsOut
from commute_planner.services.planner_service import PlannerService

router = APIRouter(tags=["results"])


class ResultOut(BaseModel):
    employee_id: int
    name: str
    home_address: str
    main_office: LegPairOut
    client_office: LegPairOut | None


class ResultsResponse(BaseModel):
    status: Literal["ok", "pending", "no_data", "service_unavailable"]
    pending: bool
    office: OfficeOut
    # Office the committed results were computed for (may lag `office` while pending).
    computed_for: OfficeOut | None
    statistics: StatisticsOut | None
    results: list[ResultOut]
    suggested_office: CoordinateOut | None


@router.get("/v1/results", response_model=ResultsResponse)
async def get_results(planner: PlannerService = Depends(planner_dep)) -> ResultsResponse:
    view = planner.view()
    by_id = {e.id: e for e in view.employees}

    results: list[ResultOut] = []
    for r in view.ranking:
        employee = by_id.get(r.employee_id)
        results.append(
            ResultOut(
                employee_id=r.employee_id,
                name=employee.name if employee else "",
                home_address=employee.home_address if employee else "",
                main_office=LegPairOut.of(r.main_office),
                client_office=LegPairOut.of(r.client_office),
            )
        )

    commit = view.commit
    return ResultsResponse(
        status=view.status,
        pending=view.pending,
        office=OfficeOut.of(view.office),
        computed_for=OfficeOut.of(commit.office) if commit else None,
        statistics=StatisticsOut.of(commit.statistics) if commit else None,
        results=results,
        suggested_office=CoordinateOut.of(view.suggested_office),
    )


@router.post("/v1/recompute", status_code=HTTP_202_ACCEPTED)
async def recompute(planner: PlannerService = Depends(planner_dep)) -> dict[str, bool]:
    planner.retry()
    return {"accepted": True}
