"""
Geocoding utilities for FieldRoute.

This module provides a thin wrapper around the `geopy` library to
convert free-form addresses into geographic coordinates. It uses
OpenStreetMap's Nominatim service via geopy's API. A small cache is
maintained in memory to avoid repeated queries for the same address.

Example usage:

    from fieldroute.geocode import geocode_address
    coordinate = geocode_address("Piazza del Duomo, Milano")

The geocode function returns ``None`` if the address cannot be
geocoded, so callers always get either a coordinate or an explicit
absence and never a network error.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, List, Optional, Sequence, Tuple

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import Nominatim

from fieldroute.config import get_geocoder_config
from fieldroute.geometry import Coordinate
from fieldroute.optimisation import Stop

logger = logging.getLogger(__name__)

_geocoder: Optional[Nominatim] = None


def _get_geocoder() -> Nominatim:
    """Return a singleton Nominatim geocoder instance."""
    global _geocoder
    if _geocoder is None:
        cfg = get_geocoder_config()
        _geocoder = Nominatim(user_agent=cfg["user_agent"])
    return _geocoder


@lru_cache(maxsize=128)
def _lookup_address(address: str, timeout: float) -> Optional[Coordinate]:
    """Query Nominatim once. Geopy errors propagate, so only answers are cached."""
    location = _get_geocoder().geocode(address, timeout=timeout)
    if not location:
        return None
    return Coordinate(location.latitude, location.longitude)


def geocode_address(address: str) -> Optional[Coordinate]:
    """Geocode an address and return its coordinate or ``None``.

    Answers from Nominatim, including "not found", are cached in
    memory. If a timeout or service error occurs the request is retried
    once with twice the timeout; a second failure resolves to ``None``
    and is not cached, so a later call asks the service again.

    Args:
        address: Free form text to geocode.

    Returns:
        A ``Coordinate`` if geocoding succeeds, otherwise ``None``.
    """
    if not address.strip():
        return None
    timeout = get_geocoder_config()["timeout"]
    logger.debug("Geocoding address: %s", address)
    try:
        coordinate = _lookup_address(address, timeout)
    except (GeocoderTimedOut, GeocoderServiceError) as e:
        logger.warning("Geocoding '%s' failed (%s), retrying", address, e)
        try:
            coordinate = _lookup_address(address, timeout * 2)
        except (GeocoderTimedOut, GeocoderServiceError) as e:
            logger.error("Geocoding error for '%s': %s", address, e)
            return None
    if coordinate is None:
        logger.warning("No results found for address: %s", address)
        return None
    logger.debug("Geocoded %s to %s", address, coordinate)
    return coordinate


def geocode_stops(
    stops: Sequence[Stop],
    geocoder: Callable[[str], Optional[Tuple[float, float]]] = geocode_address,
) -> Tuple[List[Stop], List[Stop]]:
    """Attach coordinates to stops that do not have one yet.

    Addresses are geocoded one after the other. Stops that already
    carry a coordinate are not looked up again.

    Returns:
        ``(geocoded, failed)``, both in input order.
    """
    geocoded: List[Stop] = []
    failed: List[Stop] = []
    for stop in stops:
        if stop.coordinate is None:
            result = geocoder(stop.label)
            if result is not None:
                stop.coordinate = Coordinate(*result)
        if stop.coordinate is None:
            failed.append(stop)
        else:
            geocoded.append(stop)
    logger.info("Geocoded %d of %d addresses", len(geocoded), len(stops))
    return geocoded, failed
