"""
commute_planner.orchestrator.recompute

Recompute Orchestrator: generation-tagged, non-blocking recomputation of commute legs.

Responsibilities:
- Own the generation counter (the only cross-call mutable state of the core).
- Start one graph run per trigger as an asyncio task and return immediately.
- Commit only the latest generation's result set (last-generation-wins); stale runs
  finish and are discarded instead of being cancelled.
"""

from __future__ import annotations

import asyncio
import enum
import itertools
from collections.abc import Callable, Iterable

from commute_planner.domain.models import CommitRecord, Employee, OfficeLocation
from commute_planner.engine.routing import RouteEstimator
from commute_planner.engine.throttle import CallThrottle
from commute_planner.observability.logging import bind_recompute_context, get_logger
from commute_planner.orchestrator.graph import build_graph
from commute_planner.orchestrator.nodes import RecomputeContext
from commute_planner.orchestrator.state import RecomputePhase

log = get_logger(__name__)


class TriggerReason(enum.StrEnum):
    roster_geocoded = "roster_geocoded"
    office_changed = "office_changed"
    manual_retry = "manual_retry"


class RecomputeOrchestrator:
    def __init__(
        self,
        *,
        estimator: RouteEstimator,
        throttle: CallThrottle,
        on_commit: Callable[[CommitRecord], None] | None = None,
    ) -> None:
        self._counter = itertools.count(1)
        self._generation = 0
        self._phases: dict[int, RecomputePhase] = {}
        self._tasks: dict[int, asyncio.Task[CommitRecord | None]] = {}
        self._last_commit: CommitRecord | None = None
        self._on_commit = on_commit
        self._graph = build_graph(
            ctx=RecomputeContext(
                estimator=estimator,
                throttle=throttle,
                is_current=self.is_current,
                publish=self._publish,
                mark_phase=self._mark_phase,
            )
        )

    @property
    def current_generation(self) -> int:
        return self._generation

    @property
    def last_commit(self) -> CommitRecord | None:
        return self._last_commit

    @property
    def busy(self) -> bool:
        return bool(self._tasks)

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def phase_of(self, generation: int) -> RecomputePhase:
        return self._phases.get(generation, RecomputePhase.idle)

    def trigger(
        self,
        *,
        employees: Iterable[Employee],
        office: OfficeLocation,
        reason: TriggerReason = TriggerReason.office_changed,
    ) -> int:
        """
        Schedule a recomputation and return its generation without waiting for it.
        Must be called from within a running event loop.
        """

        snapshot = tuple(employees)
        generation = self._generation = next(self._counter)
        self._phases[generation] = RecomputePhase.scheduled
        log.info(
            "recompute.scheduled",
            generation=generation,
            reason=reason.value,
            employees=len(snapshot),
            office_source=office.source.value,
            latitude=office.coordinate.latitude,
            longitude=office.coordinate.longitude,
        )

        task = asyncio.get_running_loop().create_task(
            self._run(generation, snapshot, office, reason), name=f"recompute-{generation}"
        )
        self._tasks[generation] = task
        task.add_done_callback(lambda t, g=generation: self._reap(g, t))
        return generation

    async def recompute(
        self,
        *,
        employees: Iterable[Employee],
        office: OfficeLocation,
        reason: TriggerReason = TriggerReason.office_changed,
    ) -> CommitRecord | None:
        """
        Trigger and wait for that generation; None means it was superseded.
        """

        generation = self.trigger(employees=employees, office=office, reason=reason)
        return await self._tasks[generation]

    async def wait_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()))

    async def _run(
        self,
        generation: int,
        employees: tuple[Employee, ...],
        office: OfficeLocation,
        reason: TriggerReason,
    ) -> CommitRecord | None:
        bind_recompute_context(generation=generation, reason=reason.value)
        try:
            final = await self._graph.ainvoke(
                {"generation": generation, "office": office, "employees": employees}
            )
        finally:
            self._phases.pop(generation, None)
        return final.get("record")

    def _publish(self, record: CommitRecord) -> None:
        self._last_commit = record
        if self._on_commit is not None:
            self._on_commit(record)

    def _mark_phase(self, generation: int, phase: RecomputePhase) -> None:
        if generation in self._phases:
            self._phases[generation] = phase
        if phase is RecomputePhase.committing:
            log.debug("recompute.committing", generation=generation)

    def _reap(self, generation: int, task: asyncio.Task[CommitRecord | None]) -> None:
        self._tasks.pop(generation, None)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("recompute.crashed", generation=generation, exc_info=exc)


# --- Module Notes -----------------------------------------------------------
# The generation check is an optimistic lock: runs never block each other, and the
# compare-then-publish in `nodes.commit_node` has no suspension point in between, so
# two runs can never both commit out of order.
