"""Flask API surface for exposing the route planner."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

from flask import Blueprint, Flask, Response, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from destmap.errors import RoutePlanningError, UnreachableSegmentError
from destmap.logger import Logger, LoggingMode
from destmap.plan import RouteMode, plan_route
from destmap.server.payload import error_payload, plan_payload
from destmap.setup import load_coords, load_graph

if TYPE_CHECKING:
    from destmap.graph.store import GraphStore

LOGGER = logging.getLogger(__name__)
STORE_KEY = "DESTMAP_GRAPH_STORE"
COORDS_KEY = "DESTMAP_COORDS"
LOGGER_KEY = "DESTMAP_PLAN_LOGGER"

routes = Blueprint("routes", __name__)


def create_app(
    store: GraphStore | None = None,
    coords: dict[str, Any] | None = None,
    logger: Logger | None = None,
) -> Flask:
    """Build the Flask app serving `store` (the bundled graph by default)."""
    app = Flask(__name__)
    app.config[STORE_KEY] = store if store is not None else load_graph()
    app.config[COORDS_KEY] = coords if coords is not None else load_coords()
    app.config[LOGGER_KEY] = logger or Logger(LoggingMode.from_env())
    app.register_blueprint(routes)
    app.register_error_handler(BadRequest, _bad_request)
    app.after_request(_inject_cors)
    return app


def _inject_cors(response: Response) -> Response:
    """Allow simple cross-origin requests from the browser frontend."""
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    response.headers.setdefault("Access-Control-Allow-Headers", "Content-Type")
    response.headers.setdefault("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
    return response


def _bad_request(exc: BadRequest) -> tuple[Response, int]:
    return jsonify({"success": False, "error": exc.description}), 400


def _parse_payload() -> dict[str, object]:
    raw_payload = request.get_json(silent=True)
    if raw_payload is None:
        return {}
    if not isinstance(raw_payload, dict):
        msg = "Request body must be a JSON object."
        raise BadRequest(msg)
    return raw_payload


def _parse_places(payload: dict[str, object]) -> list[object]:
    """Return the raw waypoint list; anything but an array counts as empty."""
    places = payload.get("places")
    return list(places) if isinstance(places, list) else []


def _parse_mode(raw: object) -> RouteMode:
    """Return the requested mode; unrecognized labels mean shortest path."""
    try:
        return RouteMode.from_value(raw)  # type: ignore[arg-type]
    except ValueError:
        LOGGER.warning("Unknown route mode %r; using %s", raw, RouteMode.SHORTEST.value)
        return RouteMode.SHORTEST


@routes.route("/graph", methods=["GET"])
def graph() -> Response:
    """Return the adjacency list for debugging and visualization."""
    store: GraphStore = current_app.config[STORE_KEY]
    return jsonify({"graph": store.to_dict()})


@routes.route("/coords", methods=["GET"])
def coords() -> Response:
    """Return the location -> pixel coordinates used by the map simulator."""
    return jsonify({"coords": current_app.config[COORDS_KEY]})


@routes.route("/findRoutes", methods=["POST", "OPTIONS"])
def find_routes() -> Response | tuple[Response, int]:
    """Plan a route through the requested places plus its alternatives."""
    if request.method == "OPTIONS":
        return Response("", status=204)

    payload = _parse_payload()
    places = _parse_places(payload)
    mode = _parse_mode(payload.get("mode"))

    try:
        plan = plan_route(
            current_app.config[STORE_KEY],
            places,
            mode=mode,
            limit=payload.get("dfsLimitPerSegment"),
            logger=current_app.config[LOGGER_KEY],
        )
    except UnreachableSegmentError as exc:
        return jsonify(error_payload(exc))
    except RoutePlanningError as exc:
        return jsonify(error_payload(exc)), 400
    except Exception as exc:
        LOGGER.exception("Route planning failed for places=%r", places)
        body = {"success": False, "error": "server error", "details": str(exc)}
        return jsonify(body), 500

    return jsonify(plan_payload(plan))


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.INFO)
    create_app().run(port=int(os.environ.get("PORT", "3000")))
