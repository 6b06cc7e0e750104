"""Uniform Cost Search (UCS) for the cheapest path between two locations."""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import TYPE_CHECKING

from destmap.graph.normalize import normalize_key
from destmap.graph.types import Path

if TYPE_CHECKING:
    from destmap.graph.store import GraphStore


def shortest_path(store: GraphStore, start: object, end: object) -> Path | None:
    """Return the minimum-distance path from `start` to `end`, if any.

    Both endpoints are normalized first. A request from a location to itself
    yields the single-node path at distance zero.

    Notes
    -----
    Frontier entries with equal cost are popped in insertion order, which
    makes the chosen path stable across runs when several paths tie.

    """
    source = normalize_key(start)
    target = normalize_key(end)
    if not source or not target:
        return None
    if source == target:
        return Path(nodes=(source,), distance=0)
    if source not in store or target not in store:
        return None

    tiebreak = count()
    frontier: list[tuple[int, int, str]] = [(0, next(tiebreak), source)]
    # best_cost holds the cheapest known distance label for each node.
    best_cost: dict[str, int] = {source: 0}
    previous: dict[str, str] = {}

    while frontier:
        cost, _, node = heappop(frontier)
        if node == target:
            break
        if cost > best_cost.get(node, float("inf")):
            continue

        for neighbor, step_cost in store.neighbors(node).items():
            new_cost = cost + step_cost
            if new_cost < best_cost.get(neighbor, float("inf")):
                best_cost[neighbor] = new_cost
                previous[neighbor] = node
                heappush(frontier, (new_cost, next(tiebreak), neighbor))

    nodes = _backtrack(previous, target)
    if nodes[0] != source:
        return None
    return Path(nodes=tuple(nodes), distance=best_cost[target])


def _backtrack(previous: dict[str, str], target: str) -> list[str]:
    """Follow predecessor links from `target` back to the search origin."""
    nodes = [target]
    while nodes[-1] in previous:
        nodes.append(previous[nodes[-1]])
    nodes.reverse()
    return nodes
