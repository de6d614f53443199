"""
commute_planner.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) that checks the planner service is wired.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from commute_planner.api.deps import planner_dep
from commute_planner.services.planner_service import PlannerService

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(planner: PlannerService = Depends(planner_dep)) -> dict[str, str]:
    # planner_dep answers 503 until the lifespan has built the service.
    return {"status": "ready"}
