"""
Exception types raised by FieldRoute.

The route optimisation core reports every broken precondition
synchronously; nothing is patched up with defaults. The collaborators
that talk to external services add their own error types on top.
"""


class FieldRouteError(Exception):
    """Base class for all FieldRoute errors."""


class InvalidInputError(FieldRouteError, ValueError):
    """Raised when a caller breaks a documented precondition."""


class StaleRouteError(FieldRouteError):
    """Raised when a tour is recorded against an outdated address list."""


class RoutePlanningError(FieldRouteError):
    """Raised when not enough addresses are available to plan a route."""


class PlaceLookupError(FieldRouteError):
    """Raised when the point-of-interest service cannot be queried."""
