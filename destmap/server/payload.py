"""JSON-ready payloads for planner results and failures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from destmap.errors import RoutePlanningError
    from destmap.graph.types import Route, RoutePlan, Segment


def plan_payload(plan: RoutePlan) -> dict[str, Any]:
    """Return the success body for a planned route."""
    return {
        "success": True,
        "mode": plan.mode,
        "inputPlaces": list(plan.waypoints),
        "combinedRoute": list(plan.route.path),
        "combinedDistance": plan.route.distance,
        "segmentDetails": [_segment(segment) for segment in plan.route.segments],
        "unreachableSegments": [],
        "dfsAlternatives": [_alternative(route) for route in plan.alternatives],
    }


def error_payload(exc: RoutePlanningError) -> dict[str, Any]:
    """Return the failure body for an expected planning error."""
    body: dict[str, Any] = {"success": False, "error": str(exc)}
    invalid = getattr(exc, "invalid", None)
    if invalid is not None:
        body["invalidCities"] = invalid
    pairs = getattr(exc, "pairs", None)
    if pairs is not None:
        body["unreachableSegments"] = [{"from": u, "to": v} for u, v in pairs]
    return body


def _segment(segment: Segment) -> dict[str, Any]:
    body: dict[str, Any] = {
        "from": segment.source,
        "to": segment.target,
        "path": list(segment.path.nodes),
        "distance": segment.distance,
    }
    if segment.method is not None:
        body["method"] = segment.method
    return body


def _alternative(route: Route) -> dict[str, Any]:
    return {
        "segments": [_segment(segment) for segment in route.segments],
        "combinedPath": list(route.path),
        "combinedDistance": route.distance,
    }
