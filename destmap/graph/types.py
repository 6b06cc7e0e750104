"""Immutable value types produced by the route planner."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Path:
    """A simple node path and its total distance in kilometres."""

    nodes: tuple[str, ...]
    distance: int

    @property
    def source(self) -> str:  # noqa: D102
        return self.nodes[0]

    @property
    def target(self) -> str:  # noqa: D102
        return self.nodes[-1]


@dataclass(frozen=True, slots=True)
class Segment:
    """A path between two adjacent waypoints of a request."""

    source: str
    target: str
    path: Path
    method: str | None = None

    @classmethod
    def from_path(cls, path: Path, method: str | None = None) -> Segment:
        """Build a segment whose endpoints are the ends of `path`."""
        return cls(source=path.source, target=path.target, path=path, method=method)

    @property
    def distance(self) -> int:  # noqa: D102
        return self.path.distance


@dataclass(frozen=True, slots=True)
class Route:
    """Chained segments plus their stitched node sequence."""

    segments: tuple[Segment, ...]
    path: tuple[str, ...]
    distance: int


@dataclass(frozen=True, slots=True)
class RoutePlan:
    """Primary route for a waypoint list together with its alternatives."""

    mode: str
    waypoints: tuple[str, ...]
    route: Route
    alternatives: tuple[Route, ...]
