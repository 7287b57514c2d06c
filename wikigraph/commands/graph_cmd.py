"""Graph commands - inspect page relations, breadcrumbs, and subgraphs."""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..graph.breadcrumbs import get_breadcrumbs
from ..graph.relations import SET_FIELDS, RelationsGraph
from ..graph.view import GraphData, SubgraphOptions, build_graph_data, build_subgraph_data
from ..pages.loader import DEFAULT_EXTENSIONS, load_pages


def _load_graph(content_path: Path, extensions: tuple[str, ...]) -> RelationsGraph:
    return RelationsGraph.from_pages(load_pages(content_path, extensions))


def _emit(text: str, out: Path | None, console: Console, what: str) -> None:
    if out:
        out.write_text(text, encoding="utf-8")
        console.print(f"Wrote {what} to {out}", style="green")
    else:
        print(text, end="" if text.endswith("\n") else "\n")


def run_graph(
    content_path: Path,
    *,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    fmt: str = "json",
    out: Path | None = None,
    top: int = 15,
) -> int:
    """Output the full graph view (json) or a summary of it (md, rich)."""
    console = Console(stderr=True)

    graph = _load_graph(content_path, extensions)
    data = build_graph_data(graph)

    if fmt == "rich":
        _print_rich(_summarize(data, title="Page relation graph", top=top), console=Console())
        return 0

    if fmt == "md":
        text = _to_markdown(_summarize(data, title="Page relation graph", top=top))
    else:
        text = json.dumps(data.to_dict(), indent=2) + "\n"

    _emit(text, out, console, "graph output")
    return 0


def run_subgraph(
    content_path: Path,
    root: str,
    *,
    relation_types: tuple[str, ...],
    depth: int,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    fmt: str = "json",
    out: Path | None = None,
) -> int:
    """Output the depth-bounded subgraph around one page."""
    console = Console(stderr=True)

    graph = _load_graph(content_path, extensions)
    if root not in graph:
        console.print(f"[red]Unknown page:[/red] {root}")
        return 1

    data = build_subgraph_data(graph, root, SubgraphOptions(relation_types=relation_types, depth=depth))

    if fmt == "rich":
        out_console = Console()
        out_console.print(
            f"[bold]Subgraph of {root}[/bold] (depth {depth}, types: {', '.join(relation_types)})"
        )
        t = Table(show_header=True, header_style="bold")
        t.add_column("Source", style="cyan", no_wrap=True)
        t.add_column("Type")
        t.add_column("Target", style="cyan", no_wrap=True)
        for e in data.edges:
            t.add_row(e.source, e.type, e.target)
        out_console.print(t)
        out_console.print(f"Nodes: {len(data.nodes)}  Edges: {len(data.edges)}")
        return 0

    _emit(json.dumps(data.to_dict(), indent=2) + "\n", out, console, "subgraph")
    return 0


def run_breadcrumbs(
    content_path: Path,
    slug: str,
    *,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    output_json: bool = False,
) -> int:
    """Print the root-to-page breadcrumb trail."""
    console = Console(stderr=True)

    graph = _load_graph(content_path, extensions)
    if slug not in graph:
        console.print(f"[red]Unknown page:[/red] {slug}")
        return 1

    trail = get_breadcrumbs(slug, graph)

    if output_json:
        print(json.dumps([info.to_dict() for info in trail], indent=2))
    else:
        Console().print(" > ".join(f"{info.title} [dim]({info.slug})[/dim]" for info in trail))
    return 0


def run_relations(
    content_path: Path,
    slug: str,
    *,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    output_json: bool = False,
) -> int:
    """Print the resolved (declared + inferred) relations of one page."""
    console = Console(stderr=True)

    graph = _load_graph(content_path, extensions)
    rel = graph.get(slug)
    if rel is None:
        console.print(f"[red]Unknown page:[/red] {slug}")
        return 1

    if output_json:
        print(json.dumps(rel.to_dict(), indent=2))
        return 0

    out_console = Console()
    out_console.print(f"[bold]{graph.title(slug)}[/bold] [dim]({slug})[/dim]")
    t = Table(show_header=True, header_style="bold")
    t.add_column("Relation", style="cyan")
    t.add_column("Pages")
    for name in SET_FIELDS:
        members = getattr(rel, name)
        if members:
            t.add_row(name, ", ".join(members))
    for name in ("next", "prev"):
        value = getattr(rel, name)
        if value:
            t.add_row(name, value)
    out_console.print(t)
    return 0


def _summarize(data: GraphData, *, title: str, top: int) -> dict:
    by_type = Counter(e.type for e in data.edges)
    nodes = sorted(data.nodes, key=lambda n: (-n.connections, n.id))
    return {
        "title": title,
        "node_count": len(data.nodes),
        "edge_count": len(data.edges),
        "edges_by_type": dict(sorted(by_type.items())),
        "top_connected": [
            {"id": n.id, "title": n.title, "connections": n.connections} for n in nodes[: max(0, top)]
        ],
    }


def _to_markdown(payload: dict) -> str:
    lines: list[str] = []
    lines.append(f"## {payload['title']}")
    lines.append("")
    lines.append(f"- Nodes: {payload['node_count']}")
    lines.append(f"- Edges: {payload['edge_count']}")
    for kind, count in payload["edges_by_type"].items():
        lines.append(f"  - `{kind}`: {count}")
    lines.append("")
    lines.append("### Most connected")
    lines.append("")
    lines.append("| Page | Title | Connections |")
    lines.append("|---|---|---:|")
    for r in payload["top_connected"]:
        lines.append(f"| `{r['id']}` | {r['title']} | {r['connections']} |")
    lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def _print_rich(payload: dict, *, console: Console) -> None:
    console.print(f"[bold]{payload['title']}[/bold]")
    console.print(f"Nodes: {payload['node_count']}  Edges: {payload['edge_count']}")
    console.print()

    t = Table(title="Edges by type", show_header=True, header_style="bold")
    t.add_column("Type", style="cyan", no_wrap=True)
    t.add_column("Count", justify="right")
    for kind, count in payload["edges_by_type"].items():
        t.add_row(kind, str(count))
    console.print(t)
    console.print()

    t = Table(title="Most connected", show_header=True, header_style="bold")
    t.add_column("Page", style="cyan", no_wrap=True)
    t.add_column("Title")
    t.add_column("Connections", justify="right")
    for r in payload["top_connected"]:
        t.add_row(r["id"], r["title"], str(r["connections"]))
    console.print(t)
