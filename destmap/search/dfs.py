"""Bounded depth-first enumeration of simple paths between two locations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from destmap.graph.normalize import normalize_key
from destmap.graph.types import Path

if TYPE_CHECKING:
    from destmap.graph.store import GraphStore

DEFAULT_PATH_LIMIT = 4


def enumerate_paths(
    store: GraphStore,
    start: object,
    end: object,
    limit: int = DEFAULT_PATH_LIMIT,
) -> list[Path]:
    """Return up to `limit` distinct simple paths from `start` to `end`.

    Paths come out in depth-first discovery order, following each location's
    authored neighbour order. No path visits a location twice.

    Parameters
    ----------
    store:
        Graph to traverse.
    start, end:
        Raw endpoint names; normalized before lookup.
    limit:
        Hard cap on the number of returned paths. The traversal stops as
        soon as it is reached.

    """
    source = normalize_key(start)
    target = normalize_key(end)
    if not source or not target:
        return []
    if source not in store or target not in store:
        return []
    if limit < 1:
        return []
    if source == target:
        return [Path(nodes=(source,), distance=0)]

    found: list[Path] = []
    seen: set[tuple[str, ...]] = set()

    # Parallel stacks: the current path, its running distance per depth and
    # the pending neighbour iterator for each node on the path.
    path = [source]
    distances = [0]
    frontier: list[Iterator[str]] = [iter(store.neighbors(source))]
    on_path = {source}

    while frontier and len(found) < limit:
        neighbor = next(frontier[-1], None)
        if neighbor is None:
            frontier.pop()
            distances.pop()
            on_path.discard(path.pop())
            continue
        if neighbor in on_path:
            continue

        weight = store.edge_weight(path[-1], neighbor)
        if weight is None:
            continue
        distance = distances[-1] + weight

        if neighbor == target:
            nodes = (*path, neighbor)
            if nodes not in seen:
                seen.add(nodes)
                found.append(Path(nodes=nodes, distance=distance))
            continue

        path.append(neighbor)
        distances.append(distance)
        on_path.add(neighbor)
        frontier.append(iter(store.neighbors(neighbor)))

    return found
