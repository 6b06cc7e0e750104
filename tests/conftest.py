from __future__ import annotations

import pytest

from destmap.graph.store import GraphStore


@pytest.fixture
def line_store() -> GraphStore:
    """A-B (10) and B-C (5) with no direct A-C edge."""
    return GraphStore.from_mapping(
        {
            "a": {"b": 10},
            "b": {"a": 10, "c": 5},
            "c": {"b": 5},
        },
    )


@pytest.fixture
def square_store() -> GraphStore:
    """A four-cycle plus a disconnected X-Y component."""
    return GraphStore.from_mapping(
        {
            "a": {"b": 10, "d": 4},
            "b": {"a": 10, "c": 5},
            "c": {"b": 5, "d": 20},
            "d": {"a": 4, "c": 20},
            "x": {"y": 1},
            "y": {"x": 1},
        },
    )


@pytest.fixture
def fan_store() -> GraphStore:
    """Three parallel a->b paths and three parallel b->c paths."""
    return GraphStore.from_mapping(
        {
            "a": {"b": 1, "m1": 1, "m2": 1},
            "m1": {"a": 1, "b": 1},
            "m2": {"a": 1, "b": 1},
            "b": {"c": 1, "n1": 1, "n2": 1, "a": 1, "m1": 1, "m2": 1},
            "n1": {"b": 1, "c": 1},
            "n2": {"b": 1, "c": 1},
            "c": {"b": 1, "n1": 1, "n2": 1},
        },
    )


@pytest.fixture
def grid_store() -> GraphStore:
    """A 3x3 grid with uneven symmetric weights."""
    adjacency: dict[str, dict[str, int]] = {}
    for row in range(3):
        for col in range(3):
            node = f"r{row}c{col}"
            adjacency[node] = {}
            for d_row, d_col in ((0, 1), (1, 0), (0, -1), (-1, 0)):
                n_row, n_col = row + d_row, col + d_col
                if 0 <= n_row < 3 and 0 <= n_col < 3:
                    weight = 1 + (min(row, n_row) * 3 + min(col, n_col)) % 4
                    adjacency[node][f"r{n_row}c{n_col}"] = weight
    return GraphStore.from_mapping(adjacency)
