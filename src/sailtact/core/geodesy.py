"""Great-circle helpers on a spherical earth."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from sailtact.core.angles import normalize_unsigned
from sailtact.core.models import Coordinate

__all__ = [
    "EARTH_RADIUS_M",
    "bearing_degrees",
    "distance_meters",
    "track_distance_meters",
]


# Mean earth radius (IUGG).
EARTH_RADIUS_M = 6_371_008.8


def distance_meters(origin: Coordinate, destination: Coordinate) -> float:
    """Haversine distance between ``origin`` and ``destination`` in metres."""

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(destination.longitude - origin.longitude)

    h = math.sin(d_lat / 2.0) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2.0) ** 2
    h = min(1.0, max(0.0, h))
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def bearing_degrees(origin: Coordinate, destination: Coordinate) -> float:
    """Initial bearing from ``origin`` to ``destination``.

    0° is north and bearings increase clockwise.  Identical points have no
    defined bearing; the forward-azimuth formula then yields ``atan2(0, 0)``
    which normalises to 0.
    """

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    d_lon = math.radians(destination.longitude - origin.longitude)

    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return normalize_unsigned(math.degrees(math.atan2(y, x)))


def track_distance_meters(coordinates: Sequence[Coordinate]) -> float:
    """Cumulative haversine distance along ``coordinates``."""

    if len(coordinates) < 2:
        return 0.0

    points = np.radians(np.asarray(coordinates, dtype=float))
    lat = points[:, 0]
    lon = points[:, 1]
    d_lat = np.diff(lat)
    d_lon = np.diff(lon)

    h = np.sin(d_lat / 2.0) ** 2 + np.cos(lat[:-1]) * np.cos(lat[1:]) * np.sin(d_lon / 2.0) ** 2
    h = np.clip(h, 0.0, 1.0)
    return float(np.sum(2.0 * EARTH_RADIUS_M * np.arcsin(np.sqrt(h))))
