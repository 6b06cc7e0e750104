from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

import orjson

from destmap.graph.store import GraphStore

LOGGER = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent
ASSETS_DIR = PACKAGE_ROOT / "assets"
DEFAULT_GRAPH_FILE = ASSETS_DIR / "graph.json"
DEFAULT_COORDS_FILE = ASSETS_DIR / "coords.json"
GRAPH_FILE_ENV = "DESTMAP_GRAPH_FILE"
COORDS_FILE_ENV = "DESTMAP_COORDS_FILE"


def setup_graph(graph_path: str | Path | None = None) -> GraphStore:
    """Load the location graph and return its read-only store.

    Parameters
    ----------
    graph_path:
        Optional custom path to the adjacency JSON file. When omitted,
        `DESTMAP_GRAPH_FILE` is consulted, then the bundled
        `assets/graph.json`.

    Returns
    -------
    GraphStore
        A frozen store ready for path-finding algorithms.

    """
    path = _resolve(graph_path, GRAPH_FILE_ENV, DEFAULT_GRAPH_FILE)
    store = GraphStore.from_mapping(_read_json(path))
    LOGGER.info(
        "Loaded graph from %s with %d locations / %d edges",
        path,
        len(store),
        store.number_of_edges(),
    )
    return store


@lru_cache(maxsize=1)
def load_graph() -> GraphStore:
    """Return the process-wide graph store, loading it on first use."""
    return setup_graph()


def load_coords(coords_path: str | Path | None = None) -> dict[str, dict[str, int]]:
    """Load the display coordinates used by map frontends."""
    path = _resolve(coords_path, COORDS_FILE_ENV, DEFAULT_COORDS_FILE)
    coords = _read_json(path)
    if not isinstance(coords, dict):
        msg = f"Coordinates file must contain an object: {path}"
        raise ValueError(msg)
    return coords


def _resolve(explicit: str | Path | None, env_var: str, default: Path) -> Path:
    if explicit is not None:
        return Path(explicit)
    override = os.environ.get(env_var)
    return Path(override) if override else default


def _read_json(path: Path) -> object:
    if not path.exists():
        msg = f"Graph resource not found: {path}"
        raise FileNotFoundError(msg)
    try:
        return orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as exc:
        msg = f"Unable to parse JSON in {path}: {exc}"
        raise ValueError(msg) from exc
