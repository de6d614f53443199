from __future__ import annotations

import pytest

from commute_planner.domain.models import (
    CommuteLeg,
    CommuteResult,
    LegFailure,
    LegPair,
    TravelMode,
)
from commute_planner.engine.aggregate import CommuteBand, commute_band, rank, summarize


def _drive(minutes: float | None) -> CommuteLeg:
    if minutes is None:
        return CommuteLeg.unresolved(TravelMode.driving, LegFailure.no_route)
    return CommuteLeg(TravelMode.driving, duration_minutes=minutes, distance_km=1.0)


def _ride(minutes: float | None) -> CommuteLeg:
    if minutes is None:
        return CommuteLeg.unresolved(TravelMode.transit, LegFailure.service_unavailable)
    return CommuteLeg(TravelMode.transit, duration_minutes=minutes, distance_km=1.0)


def _result(
    employee_id: int,
    drive: float | None,
    ride: float | None,
    client: tuple[float | None, float | None] | None = None,
) -> CommuteResult:
    return CommuteResult(
        employee_id=employee_id,
        main_office=LegPair(driving=_drive(drive), transit=_ride(ride)),
        client_office=LegPair(_drive(client[0]), _ride(client[1])) if client else None,
    )


def test_averages_exclude_unresolved_legs_per_field() -> None:
    results = [
        _result(0, 10, None),
        _result(1, 20, 40),
        _result(2, None, 60),
    ]

    stats = summarize(results)

    assert stats.employee_count == 3
    # (10 + 20) / 2, not / 3
    assert stats.average_driving_minutes == 15
    assert stats.average_transit_minutes == 50
    assert stats.average_client_driving_minutes is None
    assert stats.average_client_transit_minutes is None


def test_client_office_averages_cover_only_employees_with_a_client_office() -> None:
    stats = summarize([_result(0, 10, 30, client=(5, None)), _result(1, 10, 30)])

    assert stats.average_client_driving_minutes == 5
    assert stats.average_client_transit_minutes is None


def test_empty_result_set_has_no_averages() -> None:
    stats = summarize([])

    assert stats.employee_count == 0
    assert stats.average_driving_minutes is None
    assert stats.average_transit_minutes is None


def test_rank_by_driving_descending_with_unresolved_last() -> None:
    results = [
        _result(0, 12, 30),
        _result(1, None, 30),
        _result(2, 45, 30),
        _result(3, 0, 30),
        _result(4, None, 10),
    ]

    assert [r.employee_id for r in rank(results)] == [2, 0, 3, 1, 4]


@pytest.mark.parametrize(
    ("leg", "band"),
    [
        (_drive(10), CommuteBand.short),
        (_drive(11), CommuteBand.moderate),
        (_drive(21), CommuteBand.long),
        (_ride(30), CommuteBand.short),
        (_ride(45), CommuteBand.moderate),
        (_ride(46), CommuteBand.long),
        (_drive(None), None),
    ],
)
def test_commute_band(leg: CommuteLeg, band: CommuteBand | None) -> None:
    assert commute_band(leg) == band
