from __future__ import annotations

import io

import pytest

from destmap.errors import (
    RoutePlanningError,
    TooFewWaypointsError,
    UnknownLocationError,
    UnreachableSegmentError,
)
from destmap.graph.stitch import stitch_segments
from destmap.graph.store import GraphStore
from destmap.logger import Logger, LoggingMode
from destmap.plan import (
    DEFAULT_SEGMENT_LIMIT,
    SEGMENT_OVERFETCH,
    RouteMode,
    coerce_limit,
    plan_route,
)
from destmap.search.ucs import shortest_path
from destmap.setup import setup_graph


def test_plan_single_leg(line_store: GraphStore) -> None:
    plan = plan_route(line_store, ["A", "C"])

    assert plan.mode == "shortest"
    assert plan.waypoints == ("a", "c")
    assert plan.route.path == ("a", "b", "c")
    assert plan.route.distance == 15
    assert [(s.source, s.target, s.method) for s in plan.route.segments] == [
        ("a", "c", "shortest"),
    ]


def test_plan_multi_waypoint_stitches_shortest_legs(square_store: GraphStore) -> None:
    plan = plan_route(square_store, [" D ", "b", "C"])

    first = shortest_path(square_store, "d", "b")
    second = shortest_path(square_store, "b", "c")
    assert first is not None
    assert second is not None
    assert plan.route.path == tuple(stitch_segments([first.nodes, second.nodes]))
    assert plan.route.path == ("d", "a", "b", "c")
    assert plan.route.distance == first.distance + second.distance == 19


def test_plan_rejects_too_few_waypoints(line_store: GraphStore) -> None:
    with pytest.raises(TooFewWaypointsError):
        plan_route(line_store, ["a"])
    with pytest.raises(TooFewWaypointsError):
        plan_route(line_store, [])


def test_plan_reports_every_unknown_waypoint(line_store: GraphStore) -> None:
    with pytest.raises(UnknownLocationError) as excinfo:
        plan_route(line_store, ["a", "Atlantis", "", "c", None])

    assert excinfo.value.invalid == ["Atlantis", "", None]
    assert isinstance(excinfo.value, RoutePlanningError)


def test_plan_stops_at_first_unreachable_leg(square_store: GraphStore) -> None:
    with pytest.raises(UnreachableSegmentError) as excinfo:
        plan_route(square_store, ["a", "x", "c"])

    assert excinfo.value.pairs == [("a", "x")]


def test_plan_enumerate_mode_uses_first_path(square_store: GraphStore) -> None:
    plan = plan_route(square_store, ["a", "c"], mode="dfs", limit=4)

    assert plan.mode == "enumerate"
    assert plan.route.path == ("a", "b", "c")
    assert plan.route.segments[0].method == "enumerate"
    assert [route.path for route in plan.alternatives] == [
        ("a", "b", "c"),
        ("a", "d", "c"),
    ]
    assert [route.distance for route in plan.alternatives] == [15, 24]


def test_plan_shortest_mode_still_builds_alternatives(square_store: GraphStore) -> None:
    plan = plan_route(square_store, ["a", "c"], limit=1)

    assert [route.path for route in plan.alternatives] == [("a", "b", "c"), ("a", "d", "c")]
    assert plan.alternatives[0].segments[0].method is None


def test_plan_caps_alternatives_at_eight(fan_store: GraphStore) -> None:
    plan = plan_route(fan_store, ["a", "b", "c"], mode=RouteMode.ENUMERATE, limit=3)

    assert plan.route.path == ("a", "b", "c")
    assert plan.route.distance == 2
    assert len(plan.alternatives) == 8
    assert plan.alternatives[0].path == ("a", "b", "c")
    assert plan.alternatives[1].path == ("a", "b", "n1", "c")
    assert plan.alternatives[-1].path == ("a", "m2", "b", "n1", "c")
    assert plan.alternatives[-1].distance == 4


def test_plan_enumerates_two_extra_paths_per_leg(fan_store: GraphStore) -> None:
    # Three candidates per leg even though only one was requested.
    plan = plan_route(fan_store, ["a", "b", "c"], mode="enumerate", limit=1)

    assert len(plan.alternatives) == 8
    assert {route.segments[0].path.nodes for route in plan.alternatives} == {
        ("a", "b"),
        ("a", "m1", "b"),
        ("a", "m2", "b"),
    }


def test_plan_default_limit_yields_six_alternatives_on_bundled_graph() -> None:
    plan = plan_route(setup_graph(), ["chennai", "madurai"], mode="dfs")

    assert len(plan.alternatives) == DEFAULT_SEGMENT_LIMIT + SEGMENT_OVERFETCH == 6
    assert len({route.path for route in plan.alternatives}) == 6
    assert plan.route.path == plan.alternatives[0].path


def test_plan_rejects_unknown_mode(line_store: GraphStore) -> None:
    with pytest.raises(ValueError, match="Invalid route mode"):
        plan_route(line_store, ["a", "c"], mode="teleport")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, 4), ("abc", 4), (0, 4), ("0", 4), (-3, 1), ("2", 2), (2.7, 2), (9, 9)],
)
def test_coerce_limit(raw: object, expected: int) -> None:
    assert coerce_limit(raw) == expected


def test_route_mode_aliases() -> None:
    assert RouteMode.from_value(None) is RouteMode.SHORTEST
    assert RouteMode.from_value("BFS") is RouteMode.SHORTEST
    assert RouteMode.from_value(" dfs ") is RouteMode.ENUMERATE
    assert RouteMode.from_value("enumerate") is RouteMode.ENUMERATE


def test_plan_emits_phase_logs(line_store: GraphStore) -> None:
    stream = io.StringIO()
    logger = Logger(LoggingMode.DEBUG, stream=stream)

    plan_route(line_store, ["a", "c"], logger=logger)

    lines = stream.getvalue().splitlines()
    assert any(line.startswith("[INFO]\tsearch.run.start") for line in lines)
    assert any("search.leg.complete" in line and "leg_km=15" in line for line in lines)
    assert any(line.startswith("[DEBUG]\tsearch.run.elapsed") for line in lines)
    assert any("alternatives.ready" in line for line in lines)


def test_plan_logs_failed_phase(square_store: GraphStore) -> None:
    stream = io.StringIO()

    with pytest.raises(UnreachableSegmentError):
        plan_route(square_store, ["a", "y"], logger=Logger(LoggingMode.INFO, stream=stream))

    assert "search.run.failed" in stream.getvalue()


def test_plan_logs_leg_summary(fan_store: GraphStore) -> None:
    stream = io.StringIO()
    logger = Logger(LoggingMode.INFO, stream=stream)

    plan_route(fan_store, ["a", "c"], mode="enumerate", logger=logger)

    leg_lines = [line for line in stream.getvalue().splitlines() if "search.leg.complete" in line]
    assert leg_lines == [
        "[INFO]\tsearch.leg.complete\torigin=a\treached=c\thops=2\tleg_km=2\tcandidates=6",
    ]
