"""CLI entrypoint for planning a route across named waypoints."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

import orjson

from destmap.errors import RoutePlanningError
from destmap.logger import Logger, LoggingMode
from destmap.plan import DEFAULT_SEGMENT_LIMIT, RouteMode, plan_route
from destmap.server.payload import error_payload, plan_payload
from destmap.setup import setup_graph

# region I/O Helpers


def echo(data: dict, *, stream: TextIO | None = None) -> None:
    """Write an indented JSON document to the chosen stream (stdout by default)."""
    stream = stream or sys.stdout
    stream.write(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())
    stream.write("\n")
    stream.flush()


# endregion I/O Helpers


# region CLI


def run_cli(args: argparse.Namespace) -> int:
    """Plan the requested route and print the response payload."""
    logger = Logger(LoggingMode.from_value(args.logging))

    with logger.phase("graph.setup"):
        store = setup_graph(args.graph)
    logger.graph_stats(store)

    try:
        plan = plan_route(
            store,
            args.waypoints,
            mode=args.mode,
            limit=args.limit,
            logger=logger,
        )
    except RoutePlanningError as exc:
        echo(error_payload(exc), stream=sys.stderr)
        return 1

    echo(plan_payload(plan))
    return 0


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for route planning."""
    parser = argparse.ArgumentParser(
        description=(
            "Plan a route through the given places in order; the first place is "
            "the origin and the last one the final destination."
        ),
    )
    parser.add_argument(
        "waypoints",
        nargs="+",
        help="Location names to visit, in order.",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in RouteMode],
        default=RouteMode.SHORTEST.value,
        help="Search strategy for each leg (default: %(default)s).",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_SEGMENT_LIMIT,
        help="Maximum enumerated paths per leg (default: %(default)s).",
    )
    parser.add_argument(
        "--graph",
        type=Path,
        default=None,
        help="Adjacency JSON file to load instead of the bundled graph.",
    )
    parser.add_argument(
        "--logging",
        choices=[mode.value for mode in LoggingMode],
        default=LoggingMode.NONE.value,
        help="Planner log verbosity written to stderr.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the CLI."""
    args = parse_args(argv)
    level = logging.WARNING if args.logging == LoggingMode.NONE.value else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s %(message)s")
    sys.exit(run_cli(args))


# endregion CLI


if __name__ == "__main__":
    main()
