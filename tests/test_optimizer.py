from __future__ import annotations

import pytest

from commute_planner.domain.errors import NoCoordinates
from commute_planner.domain.models import Coordinate, Employee
from commute_planner.engine.optimizer import optimal_location


def _employee(i: int, point: Coordinate | None) -> Employee:
    return Employee(id=i, name=f"e{i}", home_address=f"{i} Street", home_coordinate=point)


def test_centroid_is_the_mean_coordinate() -> None:
    employees = [
        _employee(0, Coordinate(-33.80, 151.20)),
        _employee(1, Coordinate(-33.90, 151.30)),
    ]

    best = optimal_location(employees)

    assert best.latitude == pytest.approx(-33.85, abs=1e-12)
    assert best.longitude == pytest.approx(151.25, abs=1e-12)


def test_unresolved_employees_are_ignored() -> None:
    employees = [
        _employee(0, Coordinate(-33.80, 151.20)),
        _employee(1, None),
        _employee(2, Coordinate(-33.90, 151.30)),
    ]

    best = optimal_location(employees)

    assert best.latitude == pytest.approx(-33.85, abs=1e-12)
    assert best.longitude == pytest.approx(151.25, abs=1e-12)


def test_no_resolved_coordinates_raises() -> None:
    with pytest.raises(NoCoordinates):
        optimal_location([])
    with pytest.raises(NoCoordinates):
        optimal_location([_employee(0, None)])
