"""
Route planning workflow for FieldRoute.

This module ties the pieces together: it geocodes the addresses held
by a ``RouteStore``, builds the nearest neighbour tour, records it in
the store and searches for lodging around the finished route.

Typical use:

    store = RouteStore()
    for address in addresses:
        store.add_address(address)
    result = plan_route(store)
    lodging = find_lodging(result["tour"])
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from fieldroute.config import get_search_radius_km
from fieldroute.exceptions import InvalidInputError, RoutePlanningError
from fieldroute.geocode import geocode_address, geocode_stops
from fieldroute.geometry import centroid, tour_length
from fieldroute.optimisation import FIRST_IN_LIST, ExplicitStop, Stop, build_tour
from fieldroute.ranking import PointOfInterest, rank_pois
from fieldroute.places import find_candidates
from fieldroute.store import RouteStore

logger = logging.getLogger(__name__)


def plan_route(
    store: RouteStore,
    geocoder: Callable[[str], Optional[Tuple[float, float]]] = geocode_address,
) -> dict:
    """Geocode the store's addresses, build a tour and record it.

    Addresses that fail to geocode are left out of the tour and
    reported under ``"failed"``. If the chosen start point is among
    them, the tour starts at the first geocoded address instead.

    Args:
        store: Route state holding the addresses and start selection.
        geocoder: Callable resolving an address to a coordinate or ``None``.

    Returns:
        A dictionary with the ordered ``"tour"``, its ``"total_distance_km"``
        and the list of ``"failed"`` stops.

    Raises:
        RoutePlanningError: if fewer than two addresses are available
            or fewer than two could be geocoded.
        StaleRouteError: if the store changed while geocoding.
    """
    snapshot = store.snapshot()
    if len(snapshot.stops) < 2:
        raise RoutePlanningError("at least 2 addresses are needed to plan a route")

    geocoded, failed = geocode_stops(snapshot.stops, geocoder)
    if len(geocoded) < 2:
        raise RoutePlanningError(
            f"only {len(geocoded)} of {len(snapshot.stops)} addresses could be geocoded"
        )
    for stop in failed:
        logger.warning("Leaving out address that failed to geocode: %s", stop.label)

    start = snapshot.start
    if isinstance(start, ExplicitStop) and not any(s.stop_id == start.stop_id for s in geocoded):
        start = FIRST_IN_LIST
    tour = build_tour(geocoded, start)
    store.record_tour(tour, snapshot.revision)

    total = tour_length([stop.coordinate for stop in tour])
    logger.info("Planned route through %d stops, %.1f km", len(tour), total)
    return {
        "tour": tour,
        "total_distance_km": total,
        "failed": failed,
    }


def find_lodging(
    tour: Sequence[Stop],
    radius_km: Optional[float] = None,
    lookup: Callable[[Tuple[float, float], float], List[PointOfInterest]] = find_candidates,
) -> dict:
    """Search for lodging around a planned tour.

    The search is centred on the centroid of the tour and results are
    ranked by distance from its last stop.

    Returns:
        A dictionary with the search ``"center"``, the ``"last_stop"``
        coordinate and the ranked ``"places"`` (empty if none were found).

    Raises:
        InvalidInputError: if the tour is empty or contains a stop
            without coordinates.
    """
    if not tour:
        raise InvalidInputError("cannot search lodging for an empty tour")
    for stop in tour:
        if stop.coordinate is None:
            raise InvalidInputError(f"stop {stop.label!r} has not been geocoded")
    if radius_km is None:
        radius_km = get_search_radius_km()

    center = centroid(stop.coordinate for stop in tour)
    last_stop = tour[-1].coordinate
    candidates = lookup(center, radius_km)
    places = rank_pois(candidates, center, last_stop) if candidates else []
    return {
        "center": center,
        "last_stop": last_stop,
        "places": places,
    }
