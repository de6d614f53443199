"""
tests.test_api

HTTP surface tests: the app boots and exposes roster, office and results endpoints.

Responsibilities:
- Drive the FastAPI app in-process (ASGI transport) with a planner wired to fakes.
- Check status codes for the planner's error conditions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from conftest import OFFICE_A, OFFICE_B, ROSTER_ROWS

from commute_planner.api.app import create_app
from commute_planner.services.planner_service import PlannerService
from commute_planner.settings import Settings


@pytest_asyncio.fixture
async def client(planner: PlannerService) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=Settings(env="test"), planner=planner)

    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_upload_roster_then_read_results(
    client: httpx.AsyncClient, planner: PlannerService
) -> None:
    r = await client.post("/v1/roster", json={"rows": ROSTER_ROWS})
    assert r.status_code == 202
    body = r.json()
    assert body["employee_count"] == 4
    assert body["unresolved_ids"] == [3]
    assert body["superseded"] is False

    await planner.wait_idle()

    r = await client.get("/v1/results")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["pending"] is False
    assert body["computed_for"]["latitude"] == OFFICE_A.latitude
    assert body["statistics"]["employee_count"] == 3
    assert body["suggested_office"] is not None

    results = body["results"]
    assert len(results) == 3
    minutes = [x["main_office"]["driving"]["duration_minutes"] for x in results]
    assert minutes == sorted(minutes, reverse=True)
    ada = next(x for x in results if x["name"] == "Ada")
    assert ada["client_office"] is not None
    assert ada["main_office"]["driving"]["band"] in {"short", "moderate", "long"}
    anon = next(x for x in results if x["name"] == "Employee 2")
    assert anon["client_office"] is None

    r = await client.get("/v1/roster")
    assert r.status_code == 200
    lost = r.json()[3]
    assert lost["resolved"] is False
    assert lost["home"] is None
    assert lost["geocode_issues"] == ["home:not_found"]


@pytest.mark.asyncio
async def test_results_before_upload(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/results")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "no_data"
    assert body["results"] == []
    assert body["statistics"] is None
    assert body["office"]["source"] == "default"


@pytest.mark.asyncio
async def test_move_office(client: httpx.AsyncClient, planner: PlannerService) -> None:
    await client.post("/v1/roster", json={"rows": ROSTER_ROWS})

    r = await client.put(
        "/v1/office", json={"latitude": OFFICE_B.latitude, "longitude": OFFICE_B.longitude}
    )
    assert r.status_code == 202
    assert r.json()["source"] == "drag"

    await planner.wait_idle()
    body = (await client.get("/v1/results")).json()
    assert body["computed_for"]["latitude"] == OFFICE_B.latitude
    assert body["computed_for"]["longitude"] == OFFICE_B.longitude


@pytest.mark.asyncio
async def test_move_office_rejects_invalid_coordinate(client: httpx.AsyncClient) -> None:
    r = await client.put("/v1/office", json={"latitude": 123.0, "longitude": 151.0})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_search_office(client: httpx.AsyncClient, planner: PlannerService) -> None:
    r = await client.post("/v1/office/search", json={"address": "3 Oxford St"})
    assert r.status_code == 202
    assert r.json()["source"] == "manual-search"

    r = await client.post("/v1/office/search", json={"address": "Nowhere Lane"})
    assert r.status_code == 404

    r = await client.get("/v1/office")
    assert r.json()["source"] == "manual-search"
    await planner.wait_idle()


@pytest.mark.asyncio
async def test_optimize_requires_coordinates(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/office/optimize")
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_optimize_and_recompute(client: httpx.AsyncClient, planner: PlannerService) -> None:
    await client.post("/v1/roster", json={"rows": ROSTER_ROWS})

    r = await client.post("/v1/office/optimize")
    assert r.status_code == 202
    assert r.json()["source"] == "optimized"

    r = await client.post("/v1/recompute")
    assert r.status_code == 202
    await planner.wait_idle()

    body = (await client.get("/v1/results")).json()
    assert body["status"] == "ok"
    assert body["computed_for"]["source"] == "optimized"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "req-42"})
    assert r.headers["x-request-id"] == "req-42"

    r = await client.get("/healthz")
    assert r.headers["x-request-id"]
