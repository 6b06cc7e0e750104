"""Helpers for joining per-segment node paths into one route."""

from __future__ import annotations

from typing import Iterable, Sequence

from .normalize import normalize_key


def stitch_segments(segments: Iterable[Sequence[str] | None]) -> list[str]:
    """Concatenate segment node paths, keeping each location's first visit.

    The shared junction between consecutive segments is emitted once, and so
    is any location an earlier segment already passed through. Missing or
    empty segments are skipped.
    """
    stitched: list[str] = []
    emitted: set[str] = set()

    for segment in segments:
        if not segment:
            continue
        for node in segment:
            key = normalize_key(node)
            if key in emitted:
                continue
            stitched.append(key)
            emitted.add(key)

    return stitched
