"""Tab-separated phase logging for the route-planning pipeline."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter
from typing import TYPE_CHECKING, Any, Iterator, TextIO

if TYPE_CHECKING:
    from destmap.graph.store import GraphStore
    from destmap.graph.types import Path

LOG_MODE_ENV = "DESTMAP_LOG_MODE"


class LoggingMode(str, Enum):
    """Supported logging verbosity for the route planner."""

    NONE = "none"
    INFO = "info"
    DEBUG = "debug"

    @classmethod
    def from_value(cls, value: LoggingMode | str | None) -> LoggingMode:
        """Normalize arbitrary user input into a `LoggingMode`."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.NONE
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            valid = ", ".join(mode.value for mode in cls)
            msg = f"Invalid logging mode: {value!r}. Expected one of {{{valid}}}."
            raise ValueError(msg) from exc

    @classmethod
    def from_env(cls) -> LoggingMode:
        """Read the mode from `DESTMAP_LOG_MODE`, defaulting to silent."""
        return cls.from_value(os.environ.get(LOG_MODE_ENV))


@dataclass(slots=True)
class Logger:
    """Minimal logger that emits deterministic plan-phase updates.

    Lines are tab-separated `[LEVEL]  message  key=value ...` records written
    to `stream` (stderr unless given), keeping stdout free for payloads.
    """

    mode: LoggingMode = LoggingMode.NONE
    stream: TextIO | None = field(default=None, repr=False)

    @property
    def is_info_enabled(self) -> bool:  # noqa: D102
        return self.mode in (LoggingMode.INFO, LoggingMode.DEBUG)

    @property
    def is_debug_enabled(self) -> bool:  # noqa: D102
        return self.mode is LoggingMode.DEBUG

    def info(self, message: str, **context: Any) -> None:  # noqa: ANN401, D102
        if self.is_info_enabled:
            self._emit("INFO", message, context)

    def debug(self, message: str, **context: Any) -> None:  # noqa: ANN401, D102
        if self.is_debug_enabled:
            self._emit("DEBUG", message, context)

    def graph_stats(self, store: GraphStore) -> None:
        """Log the size of the loaded location graph."""
        if not self.is_info_enabled:
            return
        self.info(
            "graph.stats",
            locations=len(store),
            edges=store.number_of_edges(),
        )

    def leg(self, path: Path, candidates: int | None = None) -> None:
        """Summarize one solved waypoint leg."""
        self.info(
            "search.leg.complete",
            origin=path.source,
            reached=path.target,
            hops=len(path.nodes) - 1,
            leg_km=path.distance,
            candidates=candidates,
        )

    @contextmanager
    def phase(self, name: str, **details: Any) -> Iterator[None]:  # noqa: ANN401
        """Emit deterministic start/done messages for a logical phase."""
        if not self.is_info_enabled:
            yield
            return

        self.info(f"{name}.start", **details)
        start = perf_counter()
        try:
            yield
        except Exception as exc:
            self.info(f"{name}.failed", error=str(exc))
            raise
        else:
            self.info(f"{name}.complete", **details)
            if self.is_debug_enabled:
                elapsed = perf_counter() - start
                self.debug(f"{name}.elapsed", seconds=f"{elapsed:.3f}")

    def _emit(self, level: str, message: str, context: dict[str, Any]) -> None:
        parts = [f"[{level}]\t{message}"]
        extras = "\t".join(
            f"{key}={value}" for key, value in context.items() if value is not None
        )
        if extras:
            parts.append(extras)
        print("\t".join(parts), file=self.stream or sys.stderr)
