from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .models import EDGE_TYPES
from .pages.loader import DEFAULT_EXTENSIONS

CONFIG_FILENAME = "wikigraph.toml"

# Probed, in order, below each directory when no content_dir is configured
CONTENT_DIR_CANDIDATES = ("src/content/pages", "content")

DEFAULT_GRAPH_TYPES = ("ntpp", "tpp", "po", "ec", "eq", "next")


@dataclass(frozen=True)
class GraphDefaults:
    depth: int = 2
    relation_types: tuple[str, ...] = DEFAULT_GRAPH_TYPES


@dataclass(frozen=True)
class SiteConfig:
    root: Path | None = None  # directory holding the config file
    content_dir: Path | None = None
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    out_dir: Path | None = None
    graph: GraphDefaults = field(default_factory=GraphDefaults)


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _resolve(root: Path, value: Any, key: str) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{key} must be a non-empty string")
    path = Path(value)
    return path if path.is_absolute() else (root / path)


def load_config(path: Path) -> SiteConfig:
    """
    Load site configuration from TOML.

    Relative directories are resolved against the config file's directory.
    """
    import tomllib

    data = tomllib.loads(path.read_text(encoding="utf-8"))
    root = path.parent.resolve()

    extensions = data.get("extensions", list(DEFAULT_EXTENSIONS))
    if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
        raise ValueError("extensions must be a list of strings")
    extensions = tuple(e if e.startswith(".") else f".{e}" for e in extensions)
    if not extensions:
        raise ValueError("extensions must not be empty")

    graph_raw = _coerce_dict(data.get("graph"))

    depth = graph_raw.get("depth", GraphDefaults.depth)
    if not isinstance(depth, int) or isinstance(depth, bool) or depth < 0:
        raise ValueError("graph.depth must be a non-negative integer")

    types = graph_raw.get("relation_types", list(DEFAULT_GRAPH_TYPES))
    if not isinstance(types, list):
        raise ValueError("graph.relation_types must be a list")
    unknown = [t for t in types if t not in EDGE_TYPES]
    if unknown:
        raise ValueError(f"graph.relation_types has unknown kind(s): {', '.join(map(str, unknown))}")

    return SiteConfig(
        root=root,
        content_dir=_resolve(root, data.get("content_dir"), "content_dir"),
        extensions=extensions,
        out_dir=_resolve(root, data.get("out_dir"), "out_dir"),
        graph=GraphDefaults(depth=depth, relation_types=tuple(types)),
    )


def find_config(start: Path) -> Path | None:
    """Find wikigraph.toml by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        candidate = p / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def detect_content_dir(start: Path) -> Path | None:
    """Find a content directory by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        for rel in CONTENT_DIR_CANDIDATES:
            candidate = p / rel
            if candidate.is_dir():
                return candidate
    return None
