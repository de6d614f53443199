"""
commute_planner.api.app

FastAPI app factory for the commute planner service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Own the shared `httpx.AsyncClient` and the planner service for the process lifetime.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from commute_planner.api.routers.health import router as health_router
from commute_planner.api.routers.office import router as office_router
from commute_planner.api.routers.results import router as results_router
from commute_planner.api.routers.roster import router as roster_router
from commute_planner.observability.logging import configure_logging, get_logger
from commute_planner.observability.middleware import RequestContextMiddleware
from commute_planner.services.planner_service import PlannerService, build_planner
from commute_planner.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, planner: PlannerService | None = None) -> FastAPI:
    """
    `planner` lets tests inject a service wired to fake geocoding/routing clients;
    otherwise one is built from settings against the real providers.
    """

    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        http: httpx.AsyncClient | None = None
        if planner is None:
            http = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
            app.state.planner = build_planner(settings=settings, http=http)
        else:
            app.state.planner = planner
        try:
            yield
        finally:
            if http is not None:
                await http.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="Office Commute Planner",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(roster_router)
    app.include_router(office_router)
    app.include_router(results_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; commute logic stays
# in the service/orchestrator/engine layers.
