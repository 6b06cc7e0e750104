"""Whole-route alternatives recombined from per-segment candidate paths."""

from __future__ import annotations

from itertools import islice, product
from typing import TYPE_CHECKING, Iterator, Sequence

from destmap.graph.stitch import stitch_segments
from destmap.graph.types import Path, Route, Segment

from .dfs import enumerate_paths
from .ucs import shortest_path

if TYPE_CHECKING:
    from destmap.graph.store import GraphStore

MAX_ALTERNATIVES = 8


def segment_candidates(
    store: GraphStore,
    start: str,
    end: str,
    limit: int,
) -> list[Path]:
    """Return candidate paths for one waypoint pair.

    Enumerated paths are preferred; when none exist the shortest path is the
    sole candidate, and an unreachable pair has no candidates at all.
    """
    paths = enumerate_paths(store, start, end, limit)
    if paths:
        return paths
    fallback = shortest_path(store, start, end)
    return [fallback] if fallback is not None else []


def iter_alternatives(candidates: Sequence[Sequence[Path]]) -> Iterator[Route]:
    """Lazily yield one route per combination of per-segment candidates.

    Combinations follow candidate-list order with the first segment varying
    slowest. A segment without candidates produces no routes.
    """
    if not candidates:
        return
    for chosen in product(*candidates):
        yield build_route(chosen)


def generate_alternatives(
    candidates: Sequence[Sequence[Path]],
    cap: int = MAX_ALTERNATIVES,
) -> list[Route]:
    """Return at most `cap` alternative routes in discovery order."""
    return list(islice(iter_alternatives(candidates), max(cap, 0)))


def build_route(paths: Sequence[Path], method: str | None = None) -> Route:
    """Chain `paths` into a route with a stitched node sequence."""
    segments = tuple(Segment.from_path(path, method) for path in paths)
    return Route(
        segments=segments,
        path=tuple(stitch_segments(path.nodes for path in paths)),
        distance=sum(path.distance for path in paths),
    )
