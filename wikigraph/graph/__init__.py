"""Relation graph, breadcrumbs, and visualization views."""

from .breadcrumbs import get_breadcrumbs, parent_of
from .relations import PageRelations, RelationsGraph
from .view import (
    GraphData,
    GraphEdge,
    GraphNode,
    SubgraphOptions,
    build_graph_data,
    build_relations_index,
    build_subgraph_data,
)

__all__ = [
    "PageRelations",
    "RelationsGraph",
    "get_breadcrumbs",
    "parent_of",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "SubgraphOptions",
    "build_graph_data",
    "build_relations_index",
    "build_subgraph_data",
]
