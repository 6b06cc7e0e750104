"""Read-only weighted location graph backed by a frozen NetworkX digraph."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterator

import networkx as nx

from .normalize import normalize_key

# Edge attribute holding the authored distance in kilometres.
DISTANCE_ATTR = "distance"
# Node attribute flagging locations that appear as top-level keys.
DECLARED_ATTR = "declared"


@dataclass(frozen=True, slots=True)
class GraphStore:
    """Immutable adjacency store keyed by canonical location names.

    Edges are kept exactly as authored, so an entry `a -> b` without the
    reverse `b -> a` stays one-directional in the underlying digraph.
    Weight lookups (`edge_weight`) tolerate that by checking both directions.
    Neighbours referenced without their own top-level entry exist as nodes
    but are not members of the store and have no outgoing edges.
    """

    graph: nx.DiGraph

    @classmethod
    def from_mapping(cls, adjacency: Mapping[str, Mapping[str, int]]) -> GraphStore:
        """Build a frozen store from a `{location: {neighbor: km}}` mapping."""
        if not isinstance(adjacency, Mapping):
            msg = "Graph definition must be an object of adjacency mappings."
            raise ValueError(msg)

        graph = nx.DiGraph()
        edges: list[tuple[str, str, int]] = []
        for raw_key, neighbors in adjacency.items():
            key = _checked_key(raw_key)
            if not isinstance(neighbors, Mapping):
                msg = f"Neighbors of {key!r} must be an object, got {type(neighbors).__name__}."
                raise ValueError(msg)
            graph.add_node(key, **{DECLARED_ATTR: True})
            for raw_neighbor, distance in neighbors.items():
                neighbor = _checked_key(raw_neighbor)
                edges.append((key, neighbor, _checked_distance(key, neighbor, distance)))

        # Declared nodes are added first so their iteration order matches the source.
        for u, v, distance in edges:
            graph.add_edge(u, v, **{DISTANCE_ATTR: distance})

        return cls(graph=nx.freeze(graph))

    def __contains__(self, key: object) -> bool:
        node = self.graph.nodes.get(key) if isinstance(key, str) else None
        return bool(node and node.get(DECLARED_ATTR))

    def __len__(self) -> int:
        return sum(1 for _ in self.keys())

    def keys(self) -> Iterator[str]:
        """Yield the declared location keys in authored order."""
        for node, declared in self.graph.nodes(data=DECLARED_ATTR, default=False):
            if declared:
                yield node

    def neighbors(self, key: str) -> dict[str, int]:
        """Return the outgoing `{neighbor: km}` mapping, empty when unknown."""
        if key not in self.graph:
            return {}
        return {
            neighbor: data[DISTANCE_ATTR]
            for neighbor, data in self.graph.adj[key].items()
        }

    def edge_weight(self, u: str, v: str) -> int | None:
        """Return the distance between `u` and `v` in either authored direction."""
        data = self.graph.get_edge_data(u, v) or self.graph.get_edge_data(v, u)
        if data is None:
            return None
        return data[DISTANCE_ATTR]

    def number_of_edges(self) -> int:  # noqa: D102
        return self.graph.number_of_edges()

    def to_dict(self) -> dict[str, dict[str, int]]:
        """Return the adjacency mapping as it was authored."""
        return {key: self.neighbors(key) for key in self.keys()}


def _checked_key(raw: object) -> str:
    key = normalize_key(raw)
    if not key:
        msg = f"Location keys must be non-empty strings, got {raw!r}."
        raise ValueError(msg)
    return key


def _checked_distance(u: str, v: str, distance: object) -> int:
    if isinstance(distance, bool) or not isinstance(distance, int) or distance <= 0:
        msg = f"Distance {u!r} -> {v!r} must be a positive integer, got {distance!r}."
        raise ValueError(msg)
    return distance
