"""
Route optimisation heuristic for FieldRoute.

This module builds a visiting order through a set of geocoded stops
with the nearest neighbour heuristic: starting from the chosen start
stop, it repeatedly walks to the closest stop not yet visited. No
refinement pass (2-opt or similar) is applied afterwards, so the
resulting tour can leave a straggler for last. That behaviour is
intentional and covered by the tests.

The start of the tour is chosen with a ``StartSelector``: either
``FIRST_IN_LIST`` or ``ExplicitStop(stop_id)``.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from fieldroute.exceptions import InvalidInputError
from fieldroute.geometry import Coordinate, haversine_distance

_stop_ids = itertools.count(1)


@dataclass(eq=False)
class Stop:
    """One address on a route.

    ``coordinate`` stays ``None`` until the address has been geocoded.
    Stops compare by identity, so two stops with the same label are
    still distinct entries of a tour.
    """

    label: str
    coordinate: Optional[Coordinate] = None
    stop_id: int = field(default_factory=lambda: next(_stop_ids))


@dataclass(frozen=True)
class FirstInList:
    """Start the tour at the first stop in input order."""


@dataclass(frozen=True)
class ExplicitStop:
    """Start the tour at the stop carrying ``stop_id``."""

    stop_id: int


StartSelector = Union[FirstInList, ExplicitStop]

FIRST_IN_LIST = FirstInList()


def select_start(stops: Sequence[Stop], start: StartSelector = FIRST_IN_LIST) -> Stop:
    """Return the stop designated by ``start``.

    Raises:
        InvalidInputError: if ``stops`` is empty or no stop matches an
            explicit selector.
    """
    if not stops:
        raise InvalidInputError("cannot select a start from an empty list of stops")
    if isinstance(start, ExplicitStop):
        for stop in stops:
            if stop.stop_id == start.stop_id:
                return stop
        raise InvalidInputError(f"no stop with id {start.stop_id} in the input")
    return stops[0]


def build_tour(stops: Sequence[Stop], start: StartSelector = FIRST_IN_LIST) -> List[Stop]:
    """Construct a tour using the nearest neighbour heuristic.

    Args:
        stops: Geocoded stops. Every stop must carry a coordinate; the
            caller filters out addresses that failed to geocode.
        start: Which stop the tour begins with.

    Returns:
        A new list holding every input stop exactly once. Lists of 0, 1
        or 2 stops are returned in input order. For longer lists the
        first element is the selected start and each following stop is
        the closest remaining one to its predecessor; on exact ties the
        stop appearing first in input order wins.

    Raises:
        InvalidInputError: if a stop has no coordinate, or if ``start``
            names a stop that is not in the input.
    """
    for stop in stops:
        if stop.coordinate is None:
            raise InvalidInputError(f"stop {stop.label!r} has not been geocoded")
    if len(stops) <= 2:
        if stops and isinstance(start, ExplicitStop):
            select_start(stops, start)
        return list(stops)

    current = select_start(stops, start)
    unvisited = [stop for stop in stops if stop is not current]
    route = [current]
    while unvisited:
        # min() keeps the first of equal keys, so ties follow input order
        nearest = min(unvisited, key=lambda s: haversine_distance(current.coordinate, s.coordinate))
        route.append(nearest)
        unvisited.remove(nearest)
        current = nearest
    return route
