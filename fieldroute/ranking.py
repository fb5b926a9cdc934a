"""
Point-of-interest ranking for FieldRoute.

Candidates returned by a lookup service are annotated with their
distance from a primary reference point (usually the centroid of the
route) and, optionally, from a secondary reference point (usually the
last stop of the tour). When a secondary reference is given it drives
the ordering, since the traveller ends the day there.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from fieldroute.exceptions import InvalidInputError
from fieldroute.geometry import Coordinate, haversine_distance

MAX_RESULTS = 20


@dataclass(frozen=True)
class PointOfInterest:
    """A geo-tagged candidate, such as a hotel, returned by a lookup service.

    The distance fields stay ``None`` until ``rank_pois`` fills them in.
    """

    name: str
    address: str
    coordinate: Coordinate
    category: str
    distance_km: Optional[float] = None
    secondary_distance_km: Optional[float] = None


def rank_pois(
    candidates: Sequence[PointOfInterest],
    primary: Tuple[float, float],
    secondary: Optional[Tuple[float, float]] = None,
) -> List[PointOfInterest]:
    """Annotate, sort and cap a list of candidates.

    Args:
        candidates: Unsorted candidates from a lookup service.
        primary: Reference point for ``distance_km``.
        secondary: Optional reference point for ``secondary_distance_km``.
            When given, results are ordered by this distance instead.

    Returns:
        At most ``MAX_RESULTS`` annotated copies of the candidates in
        ascending order of the distance used for sorting. Equal
        distances keep their input order. Categories are passed through
        untouched.

    Raises:
        InvalidInputError: if ``candidates`` is empty.
    """
    if not candidates:
        raise InvalidInputError("no candidates to rank")

    ranked = []
    for poi in candidates:
        secondary_distance = None
        if secondary is not None:
            secondary_distance = haversine_distance(secondary, poi.coordinate)
        ranked.append(
            dataclasses.replace(
                poi,
                distance_km=haversine_distance(primary, poi.coordinate),
                secondary_distance_km=secondary_distance,
            )
        )

    if secondary is not None:
        ranked.sort(key=lambda p: p.secondary_distance_km)
    else:
        ranked.sort(key=lambda p: p.distance_km)
    return ranked[:MAX_RESULTS]
