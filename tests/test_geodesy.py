from __future__ import annotations

import pytest

from sailtact.core.geodesy import (
    EARTH_RADIUS_M,
    bearing_degrees,
    distance_meters,
    track_distance_meters,
)
from sailtact.core.models import Coordinate


def test_distance_between_identical_points_is_zero() -> None:
    point = Coordinate(43.5, 7.0)
    assert distance_meters(point, point) == 0.0


def test_one_degree_of_latitude_matches_arc_length() -> None:
    origin = Coordinate(0.0, 0.0)
    destination = Coordinate(1.0, 0.0)
    expected = EARTH_RADIUS_M * 3.141592653589793 / 180.0

    assert distance_meters(origin, destination) == pytest.approx(expected, rel=1e-9)
    assert distance_meters(destination, origin) == pytest.approx(expected, rel=1e-9)


@pytest.mark.parametrize(
    ("destination", "expected"),
    [
        (Coordinate(1.0, 0.0), 0.0),
        (Coordinate(0.0, 1.0), 90.0),
        (Coordinate(-1.0, 0.0), 180.0),
        (Coordinate(0.0, -1.0), 270.0),
    ],
)
def test_bearing_cardinal_directions(destination: Coordinate, expected: float) -> None:
    assert bearing_degrees(Coordinate(0.0, 0.0), destination) == pytest.approx(expected, abs=1e-9)


def test_bearing_is_normalised() -> None:
    bearing = bearing_degrees(Coordinate(10.0, 10.0), Coordinate(9.0, 9.0))
    assert 180.0 < bearing < 270.0


def test_bearing_of_identical_points_is_zero() -> None:
    point = Coordinate(43.5, 7.0)
    assert bearing_degrees(point, point) == 0.0


def test_track_distance_sums_legs() -> None:
    points = [Coordinate(0.0, 0.0), Coordinate(0.0, 1.0), Coordinate(1.0, 1.0)]
    expected = distance_meters(points[0], points[1]) + distance_meters(points[1], points[2])

    assert track_distance_meters(points) == pytest.approx(expected, rel=1e-9)


@pytest.mark.parametrize("points", [[], [Coordinate(1.0, 2.0)]])
def test_track_distance_needs_two_points(points: list[Coordinate]) -> None:
    assert track_distance_meters(points) == 0.0
