"""
FieldRoute package initialization.

This package provides the route planning core used by field
technicians to organise installation visits. Components include
geocoding, tour construction, lodging search and route state.

Modules:
    geometry     – Haversine distance, centroid and path length.
    optimisation – Nearest neighbour tour construction.
    ranking      – Distance annotation and ranking of points of interest.
    store        – Address list and computed tour state.
    geocode      – Functions to geocode addresses using Nominatim.
    places       – Lodging lookup via the Overpass API.
    planner      – End-to-end route planning and lodging search.
    config       – Environment driven settings.

The tour is built with a greedy heuristic and is not guaranteed to be
the shortest possible round trip.
"""

__all__ = [
    "geometry",
    "optimisation",
    "ranking",
    "store",
    "geocode",
    "places",
    "planner",
    "config",
]
