"""
commute_planner.engine.optimizer

Optimizer: suggested office coordinate for a roster.

Responsibilities:
- Compute the centroid (mean latitude, mean longitude) of resolved home coordinates.

This is a centroid approximation, not a commute-minimizing solver: it ignores the road
and transit network entirely.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from commute_planner.domain.errors import NoCoordinates
from commute_planner.domain.models import Coordinate, Employee


def optimal_location(employees: Iterable[Employee]) -> Coordinate:
    points = [e.home_coordinate for e in employees if e.home_coordinate is not None]
    if not points:
        raise NoCoordinates()
    n = len(points)
    return Coordinate(
        latitude=math.fsum(p.latitude for p in points) / n,
        longitude=math.fsum(p.longitude for p in points) / n,
    )
