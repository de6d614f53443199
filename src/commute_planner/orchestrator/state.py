"""
commute_planner.orchestrator.state

Typed state schema used by the recompute graph.

Responsibilities:
- Define the contract between nodes (inputs/outputs) for one recompute generation.
- Define the per-generation lifecycle phases.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TypedDict

from commute_planner.domain.models import (
    CommitRecord,
    CommuteLeg,
    Coordinate,
    Employee,
    OfficeLocation,
    TravelMode,
)


class RecomputePhase(enum.StrEnum):
    idle = "IDLE"
    scheduled = "SCHEDULED"
    in_flight = "IN_FLIGHT"
    committing = "COMMITTING"


class Destination(enum.StrEnum):
    main_office = "main_office"
    client_office = "client_office"


@dataclass(frozen=True, slots=True)
class LegJob:
    employee_id: int
    destination: Destination
    mode: TravelMode
    origin: Coordinate
    target: Coordinate


class RecomputeState(TypedDict, total=False):
    # Inputs (captured by value at trigger time)
    generation: int
    office: OfficeLocation
    employees: tuple[Employee, ...]

    # Scheduled work and its outcomes
    jobs: tuple[LegJob, ...]
    legs: tuple[tuple[LegJob, CommuteLeg], ...]

    # Set after all legs finished: a newer generation exists
    stale: bool

    # Commit outcome (None when discarded)
    record: CommitRecord | None


# --- Module Notes -----------------------------------------------------------
# Nodes return partial updates; only the keys above are ever written.
