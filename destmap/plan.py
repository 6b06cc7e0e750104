"""High-level entrypoint that wires waypoint validation, search and stitching."""

from __future__ import annotations

import math
from enum import Enum
from itertools import pairwise
from typing import TYPE_CHECKING, Sequence

from .errors import TooFewWaypointsError, UnknownLocationError, UnreachableSegmentError
from .graph.normalize import normalize_key
from .graph.types import RoutePlan
from .logger import Logger
from .search.alternatives import (
    MAX_ALTERNATIVES,
    build_route,
    generate_alternatives,
    segment_candidates,
)
from .search.dfs import DEFAULT_PATH_LIMIT, enumerate_paths
from .search.ucs import shortest_path

if TYPE_CHECKING:
    from .graph.store import GraphStore
    from .graph.types import Path

DEFAULT_SEGMENT_LIMIT = DEFAULT_PATH_LIMIT
# Extra paths enumerated per leg beyond the requested limit.
SEGMENT_OVERFETCH = 2
MIN_WAYPOINTS = 2


class RouteMode(str, Enum):
    """Search strategy used for the primary route."""

    SHORTEST = "shortest"
    ENUMERATE = "enumerate"

    @classmethod
    def from_value(cls, value: RouteMode | str | None) -> RouteMode:
        """Normalize user input, accepting the legacy `bfs`/`dfs` labels."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.SHORTEST
        label = str(value).strip().lower()
        label = _LEGACY_MODES.get(label, label)
        try:
            return cls(label)
        except ValueError as exc:
            valid = ", ".join(mode.value for mode in cls)
            msg = f"Invalid route mode: {value!r}. Expected one of {{{valid}}}."
            raise ValueError(msg) from exc


_LEGACY_MODES = {"bfs": RouteMode.SHORTEST.value, "dfs": RouteMode.ENUMERATE.value}


def coerce_limit(value: object) -> int:
    """Return the per-segment enumeration limit for a raw request value.

    Missing, non-numeric and zero values fall back to the default; anything
    else is truncated and clamped to at least one.
    """
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_SEGMENT_LIMIT
    if not math.isfinite(number) or number == 0:
        return DEFAULT_SEGMENT_LIMIT
    return max(1, int(number))


def plan_route(
    store: GraphStore,
    waypoints: Sequence[object],
    mode: RouteMode | str | None = RouteMode.SHORTEST,
    limit: object = None,
    logger: Logger = Logger(),  # noqa: B008
) -> RoutePlan:
    """Plan a route through `waypoints` in order.

    Parameters
    ----------
    store:
        Location graph to route over.
    waypoints:
        Raw location names; the first is the origin, the last the final
        destination.
    mode:
        `shortest` solves each leg with UCS, `enumerate` takes the first
        depth-first path found for each leg.
    limit:
        Requested paths per segment (see `coerce_limit`); each leg enumerates
        up to `limit + SEGMENT_OVERFETCH` candidates.
    logger:
        Logger controlling status/timing output. Defaults to a silent logger.

    Returns
    -------
    RoutePlan
        The stitched primary route plus up to `MAX_ALTERNATIVES` alternatives.

    Raises
    ------
    TooFewWaypointsError
        Fewer than two waypoints were supplied.
    UnknownLocationError
        Some waypoints are not locations of `store`.
    UnreachableSegmentError
        The first leg without any connecting path; later legs are skipped.

    """
    route_mode = RouteMode.from_value(mode)
    per_segment = coerce_limit(limit) + SEGMENT_OVERFETCH

    if len(waypoints) < MIN_WAYPOINTS:
        raise TooFewWaypointsError(len(waypoints))

    keys = [normalize_key(waypoint) for waypoint in waypoints]
    invalid = [raw for raw, key in zip(waypoints, keys) if key not in store]
    if invalid:
        raise UnknownLocationError(invalid)

    logger.info(
        "search.initialized",
        mode=route_mode.value,
        waypoints=len(keys),
        limit=per_segment,
    )

    legs: list[Path] = []
    enumerated: list[list[Path] | None] = []

    with logger.phase("search.run", legs=len(keys) - 1):
        for start, end in pairwise(keys):
            if route_mode is RouteMode.SHORTEST:
                candidates = None
                path = shortest_path(store, start, end)
            else:
                candidates = enumerate_paths(store, start, end, per_segment)
                path = candidates[0] if candidates else None

            if path is None:
                logger.info("search.leg.unreachable", origin=start, target=end)
                raise UnreachableSegmentError([(start, end)])

            legs.append(path)
            enumerated.append(candidates)
            logger.leg(path, candidates=len(candidates) if candidates is not None else None)

    route = build_route(legs, method=route_mode.value)
    logger.info("route.ready", nodes=len(route.path), km=route.distance)

    with logger.phase("alternatives.run", cap=MAX_ALTERNATIVES):
        options = [
            found if found is not None else segment_candidates(store, start, end, per_segment)
            for (start, end), found in zip(pairwise(keys), enumerated)
        ]
        alternatives = generate_alternatives(options, MAX_ALTERNATIVES)
    logger.debug("alternatives.ready", count=len(alternatives))

    return RoutePlan(
        mode=route_mode.value,
        waypoints=tuple(keys),
        route=route,
        alternatives=tuple(alternatives),
    )
