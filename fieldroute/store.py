"""
Route state for FieldRoute.

``RouteStore`` keeps the address list being planned together with the
start selection and the last computed tour. The tour lives in an
explicit state: ``Stale`` until a tour is recorded, ``Computed`` after.
Any change to the address list or to the start selection moves the
store back to ``Stale``.

Because geocoding happens between reading the addresses and recording
the tour, a tour is always recorded against the ``revision`` of the
snapshot it was built from. If the addresses changed meanwhile the
tour is rejected with ``StaleRouteError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from fieldroute.exceptions import InvalidInputError, StaleRouteError
from fieldroute.optimisation import FIRST_IN_LIST, ExplicitStop, StartSelector, Stop


@dataclass(frozen=True)
class Stale:
    """No tour matches the current address list."""


@dataclass(frozen=True)
class Computed:
    """A tour built from the current address list."""

    tour: Tuple[Stop, ...]


RouteState = Union[Stale, Computed]


@dataclass(frozen=True)
class RouteSnapshot:
    """The addresses and start selection at a given revision."""

    revision: int
    stops: Tuple[Stop, ...]
    start: StartSelector


class RouteStore:
    """Address list, start selection and computed tour of one route."""

    def __init__(self) -> None:
        self._stops: List[Stop] = []
        self._start: StartSelector = FIRST_IN_LIST
        self._state: RouteState = Stale()
        self._revision = 0

    @property
    def stops(self) -> Tuple[Stop, ...]:
        return tuple(self._stops)

    @property
    def start(self) -> StartSelector:
        return self._start

    @property
    def state(self) -> RouteState:
        return self._state

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def tour(self) -> Optional[Tuple[Stop, ...]]:
        """The computed tour, or ``None`` while the store is stale."""
        if isinstance(self._state, Computed):
            return self._state.tour
        return None

    def _invalidate(self) -> None:
        self._revision += 1
        self._state = Stale()

    def add_address(self, address: str) -> Stop:
        """Append a new stop for ``address``.

        Surrounding whitespace is stripped.

        Raises:
            InvalidInputError: if the address is blank.
        """
        address = address.strip()
        if not address:
            raise InvalidInputError("address must not be blank")
        stop = Stop(label=address)
        self._stops.append(stop)
        self._invalidate()
        return stop

    def remove_address(self, index: int) -> Stop:
        """Remove the stop at ``index``; raises ``IndexError`` if out of range."""
        stop = self._stops.pop(index)
        if isinstance(self._start, ExplicitStop) and self._start.stop_id == stop.stop_id:
            self._start = FIRST_IN_LIST
        self._invalidate()
        return stop

    def clear(self) -> None:
        """Remove every stop and reset the start selection."""
        self._stops = []
        self._start = FIRST_IN_LIST
        self._invalidate()

    def set_start_point(self, stop_id: int) -> None:
        """Start the tour at the stop with ``stop_id``; any earlier choice is replaced."""
        if not any(stop.stop_id == stop_id for stop in self._stops):
            raise InvalidInputError(f"no stop with id {stop_id} in the route")
        self._start = ExplicitStop(stop_id)
        self._invalidate()

    def reset_start_point(self) -> None:
        """Start the tour at the first stop again."""
        self._start = FIRST_IN_LIST
        self._invalidate()

    def snapshot(self) -> RouteSnapshot:
        """Capture the current revision, stops and start selection."""
        return RouteSnapshot(self._revision, tuple(self._stops), self._start)

    def record_tour(self, tour: Sequence[Stop], revision: int) -> None:
        """Store ``tour`` if it was built from the current revision."""
        if revision != self._revision:
            raise StaleRouteError(
                f"tour built from revision {revision}, store is at revision {self._revision}"
            )
        self._state = Computed(tuple(tour))
