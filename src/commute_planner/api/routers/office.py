from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import (
    HTTP_202_ACCEPTED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from commute_planner.api.deps import planner_dep
from commute_planner.api.schemas import OfficeOut
from commute_planner.domain.errors import AddressNotFound, NoCoordinates, ServiceUnavailable
from commute_planner.domain.models import Coordinate, OfficeSource
from commute_planner.services.planner_service import PlannerService

router = APIRouter(prefix="/v1/office", tags=["office"])


class OfficeMoveRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    source: Literal["drag", "manual-search"] = "drag"


class OfficeSearchRequest(BaseModel):
    address: str = Field(min_length=1, max_length=512)


@router.get("", response_model=OfficeOut)
async def get_office(planner: PlannerService = Depends(planner_dep)) -> OfficeOut:
    return OfficeOut.of(planner.office)


@router.put("", response_model=OfficeOut, status_code=HTTP_202_ACCEPTED)
async def move_office(
    body: OfficeMoveRequest,
    planner: PlannerService = Depends(planner_dep),
) -> OfficeOut:
    office = planner.move_office(
        Coordinate(body.latitude, body.longitude), OfficeSource(body.source)
    )
    return OfficeOut.of(office)


@router.post("/search", response_model=OfficeOut, status_code=HTTP_202_ACCEPTED)
async def search_office(
    body: OfficeSearchRequest,
    planner: PlannerService = Depends(planner_dep),
) -> OfficeOut:
    try:
        office = await planner.search_office(body.address)
    except AddressNotFound as e:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Address not found") from e
    except ServiceUnavailable as e:
        raise HTTPException(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Geocoding service unavailable"
        ) from e
    return OfficeOut.of(office)


@router.post("/optimize", response_model=OfficeOut, status_code=HTTP_202_ACCEPTED)
async def optimize_office(planner: PlannerService = Depends(planner_dep)) -> OfficeOut:
    try:
        office = planner.optimize()
    except NoCoordinates as e:
        raise HTTPException(
            status_code=HTTP_409_CONFLICT,
            detail="No employee coordinates available; upload a roster with valid addresses",
        ) from e
    return OfficeOut.of(office)
