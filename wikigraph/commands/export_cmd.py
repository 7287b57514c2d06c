"""Export command - write the JSON artifacts the site layer consumes."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console

from ..graph.relations import RelationsGraph
from ..graph.view import build_graph_data, build_relations_index
from ..pages.index import build_backlinks, build_popup_index
from ..pages.loader import DEFAULT_EXTENSIONS, PageStore, load_pages

POPUP_INDEX_FILE = "popup-index.json"
BACKLINKS_FILE = "backlinks.json"
GRAPH_FILE = "graph.json"
RELATIONS_FILE = "relations.json"


def build_artifacts(store: PageStore) -> dict[str, Any]:
    """Build every site artifact from one page store, keyed by file name."""
    graph = RelationsGraph.from_pages(store)
    return {
        POPUP_INDEX_FILE: build_popup_index(store),
        BACKLINKS_FILE: build_backlinks(store),
        GRAPH_FILE: build_graph_data(graph).to_dict(),
        RELATIONS_FILE: build_relations_index(graph),
    }


def _dumps(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def run_export(
    content_path: Path,
    out_dir: Path,
    *,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    quiet: bool = False,
) -> int:
    """Load the content directory and write all artifacts into ``out_dir``."""
    console = Console(stderr=True)

    store = load_pages(content_path, extensions)
    artifacts = build_artifacts(store)

    out_dir.mkdir(parents=True, exist_ok=True)
    for name, payload in artifacts.items():
        (out_dir / name).write_text(_dumps(payload), encoding="utf-8")

    if not quiet:
        console.print(f"Exported {len(store)} pages to {out_dir}", style="green")
    return 0


def _run_single(
    content_path: Path,
    name: str,
    out: Path | None,
    extensions: tuple[str, ...],
) -> int:
    console = Console(stderr=True)

    store = load_pages(content_path, extensions)
    if name == POPUP_INDEX_FILE:
        payload = build_popup_index(store)
    else:
        payload = build_backlinks(store)

    text = _dumps(payload)
    if out:
        out.write_text(text, encoding="utf-8")
        console.print(f"Wrote {name} to {out}", style="green")
    else:
        print(text, end="")
    return 0


def run_backlinks(
    content_path: Path,
    *,
    out: Path | None = None,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> int:
    """Output the backlinks map (URL path -> linking pages)."""
    return _run_single(content_path, BACKLINKS_FILE, out, extensions)


def run_index(
    content_path: Path,
    *,
    out: Path | None = None,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> int:
    """Output the popup index (URL path -> title and description)."""
    return _run_single(content_path, POPUP_INDEX_FILE, out, extensions)
