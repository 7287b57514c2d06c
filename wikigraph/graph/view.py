"""Node/edge views of the relation graph for visualization."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from ..models import EDGE_TYPES, SYMMETRIC_KINDS, EdgeType
from .breadcrumbs import get_breadcrumbs
from .relations import RelationsGraph

# Directed kinds emitted once per stored direction
DIRECTED_KINDS = ("ntpp", "tpp")


@dataclass(frozen=True)
class GraphNode:
    id: str
    title: str
    connections: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "connections": self.connections}


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    type: EdgeType

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target, "type": self.type}


@dataclass
class GraphData:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


@dataclass(frozen=True)
class SubgraphOptions:
    """Which relation kinds to follow and how many hops from the root."""

    relation_types: tuple[str, ...] = EDGE_TYPES
    depth: int = 1

    def __post_init__(self):
        unknown = [t for t in self.relation_types if t not in EDGE_TYPES]
        if unknown:
            raise ValueError(f"Unknown relation type(s): {', '.join(unknown)}")
        if self.depth < 0:
            raise ValueError("depth must be >= 0")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubgraphOptions:
        """Build options from the ``{relationTypes, depth}`` wire shape."""
        types = data.get("relationTypes", data.get("relation_types", EDGE_TYPES))
        return cls(relation_types=tuple(types), depth=int(data.get("depth", 1)))


def _pair_key(a: str, b: str, kind: str) -> tuple[str, str, str]:
    lo, hi = (a, b) if a <= b else (b, a)
    return lo, hi, kind


def build_graph_data(graph: RelationsGraph) -> GraphData:
    """Build nodes and edges for every page in the graph.

    Symmetric kinds and next/prev are emitted once per unordered pair.
    Edges pointing at slugs that are not pages are left out.
    """
    data = GraphData()
    seen: set[tuple[str, str, str]] = set()

    for slug, rel in graph.relations.items():
        info = graph.info(slug)
        if info is None:
            continue

        data.nodes.append(GraphNode(id=slug, title=info.title, connections=rel.connections))

        for kind in DIRECTED_KINDS:
            for target in getattr(rel, kind):
                if target in graph:
                    data.edges.append(GraphEdge(source=slug, target=target, type=kind))

        for kind in SYMMETRIC_KINDS:
            for target in getattr(rel, kind):
                key = _pair_key(slug, target, kind)
                if key in seen or target not in graph:
                    continue
                seen.add(key)
                data.edges.append(GraphEdge(source=slug, target=target, type=kind))

        # prev is the inverse of next; only next edges are emitted
        if rel.next and rel.next in graph:
            key = _pair_key(slug, rel.next, "next")
            if key not in seen:
                seen.add(key)
                data.edges.append(GraphEdge(source=slug, target=rel.next, type="next"))

        for target in rel.r:
            data.edges.append(GraphEdge(source=slug, target=target, type="r"))

    return data


def _adjacency(edges: list[GraphEdge]) -> dict[str, set[str]]:
    """Undirected adjacency index over the given edges."""
    adjacent: dict[str, set[str]] = defaultdict(set)
    for edge in edges:
        adjacent[edge.source].add(edge.target)
        adjacent[edge.target].add(edge.source)
    return adjacent


def build_subgraph_data(
    graph: RelationsGraph,
    root: str,
    options: SubgraphOptions,
) -> GraphData:
    """Build the subgraph around ``root``.

    Only edges of ``options.relation_types`` are kept. Pages are collected
    breadth-first up to ``options.depth`` hops, following edges in either
    direction. The result holds the collected pages and the kept edges
    between them. A root that is not a page gives an empty graph.
    Edges to slugs that are not pages are dropped before the walk, so a
    dangling slug never bridges two pages.
    """
    if root not in graph:
        return GraphData()
    full = build_graph_data(graph)

    wanted = set(options.relation_types)
    relevant = [e for e in full.edges if e.type in wanted]
    adjacent = _adjacency(relevant)

    included = {root}
    frontier = {root}
    for _ in range(options.depth):
        next_frontier = set()
        for slug in frontier:
            next_frontier.update(n for n in adjacent.get(slug, ()) if n not in included)
        if not next_frontier:
            break
        included.update(next_frontier)
        frontier = next_frontier

    return GraphData(
        nodes=[n for n in full.nodes if n.id in included],
        edges=[e for e in relevant if e.source in included and e.target in included],
    )


def build_relations_index(graph: RelationsGraph) -> dict[str, dict[str, Any]]:
    """Resolved relations and breadcrumbs for every page, keyed by slug."""
    index: dict[str, dict[str, Any]] = {}
    for slug, rel in graph.relations.items():
        entry = rel.to_dict()
        entry["breadcrumbs"] = [info.to_dict() for info in get_breadcrumbs(slug, graph)]
        index[slug] = entry
    return index
