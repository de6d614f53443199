"""
commute_planner.engine.aggregate

Aggregator: summary statistics and display ranking over a committed result set.

Responsibilities:
- Per-field averages that ignore unresolved legs (never counted as zero).
- Ranking by main-office driving time, unresolved last.
- Commute bands for display colouring.

Pure functions; no I/O.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence

from commute_planner.domain.models import CommuteLeg, CommuteResult, Statistics, TravelMode


class CommuteBand(enum.StrEnum):
    short = "short"
    moderate = "moderate"
    long = "long"


# Upper bounds (minutes) of the short and moderate bands.
BAND_LIMITS: dict[TravelMode, tuple[float, float]] = {
    TravelMode.driving: (10, 20),
    TravelMode.transit: (30, 45),
}


def _mean(values: Iterable[float | None]) -> float | None:
    valid = [v for v in values if v is not None]
    if not valid:
        return None
    return sum(valid) / len(valid)


def summarize(results: Sequence[CommuteResult]) -> Statistics:
    clients = [r.client_office for r in results if r.client_office is not None]
    return Statistics(
        employee_count=len(results),
        average_driving_minutes=_mean(r.main_office.driving.duration_minutes for r in results),
        average_transit_minutes=_mean(r.main_office.transit.duration_minutes for r in results),
        average_client_driving_minutes=_mean(c.driving.duration_minutes for c in clients),
        average_client_transit_minutes=_mean(c.transit.duration_minutes for c in clients),
    )


def rank(results: Iterable[CommuteResult]) -> list[CommuteResult]:
    """
    Longest main-office drive first; unresolved drives sort last, ties keep input order.
    """

    def key(r: CommuteResult) -> tuple[bool, float]:
        minutes = r.main_office.driving.duration_minutes
        return (minutes is None, -(minutes or 0.0))

    return sorted(results, key=key)


def commute_band(leg: CommuteLeg) -> CommuteBand | None:
    if leg.duration_minutes is None:
        return None
    short, moderate = BAND_LIMITS[leg.mode]
    if leg.duration_minutes <= short:
        return CommuteBand.short
    if leg.duration_minutes <= moderate:
        return CommuteBand.moderate
    return CommuteBand.long
