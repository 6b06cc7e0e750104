"""Planning failures reported back to callers of `plan_route`."""

from __future__ import annotations

from typing import Sequence


class RoutePlanningError(Exception):
    """Base class for every expected route-planning failure."""


class TooFewWaypointsError(RoutePlanningError):
    """Raised when a request names fewer than two waypoints."""

    def __init__(self, count: int) -> None:
        super().__init__("places must be an array with at least [from, to]")
        self.count = count


class UnknownLocationError(RoutePlanningError):
    """Raised when waypoints do not resolve to known locations."""

    def __init__(self, invalid: Sequence[object]) -> None:
        super().__init__("One or more input cities are not in the database.")
        self.invalid = list(invalid)


class UnreachableSegmentError(RoutePlanningError):
    """Raised when no path connects an adjacent waypoint pair."""

    def __init__(self, pairs: Sequence[tuple[str, str]]) -> None:
        super().__init__("One or more segments are unreachable.")
        self.pairs = list(pairs)
