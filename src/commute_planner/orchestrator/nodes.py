from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from commute_planner.domain.models import (
    CommitRecord,
    CommuteLeg,
    CommuteResult,
    LegFailure,
    LegPair,
    TravelMode,
)
from commute_planner.engine.aggregate import summarize
from commute_planner.engine.routing import RouteEstimator
from commute_planner.engine.throttle import CallThrottle
from commute_planner.observability.logging import get_logger
from commute_planner.orchestrator.state import (
    Destination,
    LegJob,
    RecomputePhase,
    RecomputeState,
)

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RecomputeContext:
    """
    Collaborators bound into the graph nodes by the orchestrator.
    """

    estimator: RouteEstimator
    throttle: CallThrottle
    is_current: Callable[[int], bool]
    publish: Callable[[CommitRecord], None]
    mark_phase: Callable[[int, RecomputePhase], None]


async def snapshot_node(state: RecomputeState) -> dict[str, Any]:
    """
    Scheduled: plan up to four legs per employee with a resolved home coordinate.
    """

    office = state["office"].coordinate
    located = [
        (e, e.home_coordinate) for e in state.get("employees", ()) if e.home_coordinate is not None
    ]

    jobs: list[LegJob] = []
    for e, home in located:
        for mode in (TravelMode.driving, TravelMode.transit):
            jobs.append(LegJob(e.id, Destination.main_office, mode, home, office))
        if e.client_office_coordinate is not None:
            for mode in (TravelMode.driving, TravelMode.transit):
                jobs.append(
                    LegJob(
                        e.id,
                        Destination.client_office,
                        mode,
                        home,
                        e.client_office_coordinate,
                    )
                )

    return {"employees": tuple(e for e, _ in located), "jobs": tuple(jobs)}


async def estimate_node(state: RecomputeState, *, ctx: RecomputeContext) -> dict[str, Any]:
    """
    InFlight: run every leg through the shared throttle and wait for all of them.
    """

    generation = state["generation"]
    jobs = state.get("jobs", ())
    ctx.mark_phase(generation, RecomputePhase.in_flight)
    log.info("recompute.in_flight", generation=generation, calls=len(jobs))

    async def _one(job: LegJob) -> tuple[LegJob, CommuteLeg]:
        leg = await ctx.throttle.run(
            lambda: ctx.estimator.estimate(job.origin, job.target, job.mode)
        )
        return job, leg

    legs = await asyncio.gather(*(_one(j) for j in jobs))
    return {"legs": tuple(legs), "stale": not ctx.is_current(generation)}


def route_after_estimate(state: RecomputeState) -> str:
    if state.get("stale"):
        return "discard"
    return "commit"


async def commit_node(state: RecomputeState, *, ctx: RecomputeContext) -> dict[str, Any]:
    """
    Committing: re-check the generation and publish in one step (no await in between).
    """

    generation = state["generation"]
    ctx.mark_phase(generation, RecomputePhase.committing)
    if not ctx.is_current(generation):
        log.info("recompute.discarded", generation=generation, stage="commit")
        return {"stale": True, "record": None}

    legs = state.get("legs", ())
    outage = bool(legs) and all(
        leg.failure is LegFailure.service_unavailable for _, leg in legs
    )
    results = () if outage else _assemble(state)

    record = CommitRecord(
        generation=generation,
        office=state["office"],
        results=results,
        statistics=summarize(results),
        service_outage=outage,
    )
    ctx.publish(record)
    if outage:
        log.error("recompute.service_outage", generation=generation, calls=len(legs))
    log.info(
        "recompute.committed",
        generation=generation,
        results=len(results),
        average_driving_minutes=record.statistics.average_driving_minutes,
        average_transit_minutes=record.statistics.average_transit_minutes,
    )
    return {"record": record}


async def discard_node(state: RecomputeState) -> dict[str, Any]:
    log.info("recompute.discarded", generation=state["generation"], stage="in_flight")
    return {"record": None}


def _assemble(state: RecomputeState) -> tuple[CommuteResult, ...]:
    by_key: dict[tuple[int, Destination, TravelMode], CommuteLeg] = {
        (job.employee_id, job.destination, job.mode): leg for job, leg in state.get("legs", ())
    }

    def _pair(employee_id: int, destination: Destination) -> LegPair | None:
        driving = by_key.get((employee_id, destination, TravelMode.driving))
        transit = by_key.get((employee_id, destination, TravelMode.transit))
        if driving is None or transit is None:
            return None
        return LegPair(driving=driving, transit=transit)

    results: list[CommuteResult] = []
    for e in state.get("employees", ()):
        main = _pair(e.id, Destination.main_office)
        if main is None:
            continue
        results.append(
            CommuteResult(
                employee_id=e.id,
                main_office=main,
                client_office=_pair(e.id, Destination.client_office),
            )
        )
    return tuple(results)
