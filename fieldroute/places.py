"""
Lodging lookup for FieldRoute.

This module queries the Overpass API (OpenStreetMap) for hotels,
guest houses, hostels and motels around a point and turns the raw
elements into ``PointOfInterest`` objects. Results come back in the
order the service returns them; sorting and capping is the job of
``fieldroute.ranking.rank_pois``.

Example usage:

    center = Coordinate(45.4642, 9.1900)
    candidates = find_candidates(center, radius_km=5)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from fieldroute.config import get_overpass_config
from fieldroute.exceptions import PlaceLookupError
from fieldroute.geometry import Coordinate
from fieldroute.ranking import PointOfInterest

logger = logging.getLogger(__name__)

LODGING_TYPES = ("hotel", "guest_house", "hostel", "motel")


def build_lodging_query(center: Tuple[float, float], radius_km: float, timeout: int = 25) -> str:
    """Build the Overpass QL query for lodging within ``radius_km`` of ``center``."""
    lat, lon = center
    radius_m = radius_km * 1000
    pattern = "^(" + "|".join(LODGING_TYPES) + ")$"
    selectors = "\n".join(
        f'  {kind}["tourism"~"{pattern}"](around:{radius_m},{lat},{lon});'
        for kind in ("node", "way", "relation")
    )
    return f"[out:json][timeout:{timeout}];\n(\n{selectors}\n);\nout center meta;"


def _element_coordinate(element: Dict[str, Any]) -> Optional[Coordinate]:
    if element.get("type") == "node" and "lat" in element and "lon" in element:
        return Coordinate(element["lat"], element["lon"])
    center = element.get("center")
    if center:
        return Coordinate(center["lat"], center["lon"])
    return None


def format_address(tags: Dict[str, str], coordinate: Coordinate) -> str:
    """Compose a display address from OSM ``addr:*`` tags."""
    parts = []
    street = tags.get("addr:street")
    if street:
        number = tags.get("addr:housenumber")
        parts.append(f"{number} {street}" if number else street)
    if tags.get("addr:city"):
        parts.append(tags["addr:city"])
    if tags.get("addr:postcode"):
        parts.append(tags["addr:postcode"])
    if parts:
        return ", ".join(parts)
    return f"{coordinate.lat:.4f}, {coordinate.lon:.4f}"


def parse_elements(elements: List[Dict[str, Any]]) -> List[PointOfInterest]:
    """Convert Overpass elements into points of interest.

    Elements without a usable position are skipped.
    """
    places = []
    for element in elements:
        coordinate = _element_coordinate(element)
        if coordinate is None:
            continue
        tags = element.get("tags") or {}
        places.append(
            PointOfInterest(
                name=tags.get("name") or tags.get("name:en") or "Unnamed Hotel",
                address=format_address(tags, coordinate),
                coordinate=coordinate,
                category=tags.get("tourism") or "hotel",
            )
        )
    return places


def find_candidates(center: Tuple[float, float], radius_km: float) -> List[PointOfInterest]:
    """Look up lodging around ``center``.

    Raises:
        PlaceLookupError: if the request fails or the response is not JSON.
    """
    cfg = get_overpass_config()
    query = build_lodging_query(center, radius_km, timeout=cfg["timeout"])
    logger.info("Searching for lodging near %s within %skm", center, radius_km)
    try:
        resp = requests.post(cfg["url"], data={"data": query}, timeout=cfg["timeout"] + 5)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Lodging search error: %s", e)
        raise PlaceLookupError(f"Overpass query failed: {e}") from e
    places = parse_elements(data.get("elements", []))
    logger.info("Found %d lodging candidates", len(places))
    return places
