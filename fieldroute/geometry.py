"""
Geometric primitives for FieldRoute.

Distances are great-circle distances computed with the Haversine
formula on a spherical Earth of radius 6371 km. The centroid is a
plain arithmetic mean of latitudes and longitudes, which is good
enough for stops a few hundred kilometres apart but should not be
used near the poles or across the antimeridian.

Example usage:

    rome = Coordinate(41.9028, 12.4964)
    milan = Coordinate(45.4642, 9.1900)
    haversine_distance(rome, milan)  # ~477 km
"""

from __future__ import annotations

import math
from typing import Iterable, NamedTuple, Sequence, Tuple

from fieldroute.exceptions import InvalidInputError

EARTH_RADIUS_KM = 6371.0


class Coordinate(NamedTuple):
    """A (latitude, longitude) pair in decimal degrees."""

    lat: float
    lon: float


def haversine_distance(coord1: Tuple[float, float], coord2: Tuple[float, float]) -> float:
    """Compute the great-circle distance between two coordinates in kilometers."""
    lat1, lon1 = coord1
    lat2, lon2 = coord2
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push a just past 1 for antipodal points
    a = min(1.0, a)
    c =2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def centroid(points: Iterable[Tuple[float, float]]) -> Coordinate:
    """Return the arithmetic mean of a non-empty set of coordinates.

    Raises:
        InvalidInputError: if ``points`` is empty.
    """
    points = list(points)
    if not points:
        raise InvalidInputError("centroid requires at least one coordinate")
    avg_lat = sum(lat for lat, _ in points) / len(points)
    avg_lon = sum(lon for _, lon in points) / len(points)
    return Coordinate(avg_lat, avg_lon)


def tour_length(points: Sequence[Tuple[float, float]]) -> float:
    """Total length in kilometers of the open path through ``points``."""
    length = 0.0
    for i in range(len(points) - 1):
        length += haversine_distance(points[i], points[i + 1])
    return length
