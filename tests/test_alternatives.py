from __future__ import annotations

from destmap.graph.store import GraphStore
from destmap.graph.types import Path
from destmap.search.alternatives import (
    build_route,
    generate_alternatives,
    iter_alternatives,
    segment_candidates,
)

FIRST_LEG = [Path(("a", "b"), 10), Path(("a", "c", "b"), 7)]
SECOND_LEG = [Path(("b", "e"), 1), Path(("b", "a", "e"), 9), Path(("b", "f", "e"), 4)]


def test_alternatives_follow_candidate_order() -> None:
    routes = generate_alternatives([FIRST_LEG, SECOND_LEG])

    assert len(routes) == 6
    assert [route.path for route in routes[:3]] == [
        ("a", "b", "e"),
        ("a", "b", "e"),
        ("a", "b", "f", "e"),
    ]
    assert routes[3].path == ("a", "c", "b", "e")
    assert routes[4].path == ("a", "c", "b", "e")
    assert routes[4].distance == 16
    assert [segment.path for segment in routes[4].segments] == [FIRST_LEG[1], SECOND_LEG[1]]


def test_alternatives_respect_cap() -> None:
    assert len(generate_alternatives([FIRST_LEG, SECOND_LEG], cap=4)) == 4
    assert generate_alternatives([FIRST_LEG, SECOND_LEG], cap=0) == []


def test_alternatives_need_every_segment() -> None:
    assert generate_alternatives([FIRST_LEG, []]) == []
    assert generate_alternatives([]) == []


def test_iter_alternatives_is_lazy() -> None:
    routes = iter_alternatives([FIRST_LEG, SECOND_LEG])

    first = next(routes)
    assert first.distance == 11
    assert first.segments[0].source == "a"
    assert first.segments[1].target == "e"


def test_build_route_chains_segments() -> None:
    route = build_route([FIRST_LEG[0], SECOND_LEG[2]], method="shortest")

    assert route.path == ("a", "b", "f", "e")
    assert route.distance == 14
    assert [(s.source, s.target, s.method) for s in route.segments] == [
        ("a", "b", "shortest"),
        ("b", "e", "shortest"),
    ]


def test_segment_candidates_fall_back_to_shortest(square_store: GraphStore) -> None:
    assert segment_candidates(square_store, "a", "c", 4) == [
        Path(("a", "b", "c"), 15),
        Path(("a", "d", "c"), 24),
    ]
    # With no enumerated paths the shortest path is the sole candidate.
    assert segment_candidates(square_store, "a", "c", 0) == [Path(("a", "b", "c"), 15)]
    assert segment_candidates(square_store, "a", "x", 4) == []
