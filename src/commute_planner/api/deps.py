"""
commute_planner.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide the process-wide planner service to routers.
"""

from __future__ import annotations

from fastapi import HTTPException, Request
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from commute_planner.services.planner_service import PlannerService


def planner_dep(request: Request) -> PlannerService:
    # Created in the app lifespan (see `commute_planner.api.app.create_app`).
    planner = getattr(request.app.state, "planner", None)
    if planner is None:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Planner not ready")
    return planner
