"""Breadcrumb trails along the containment hierarchy."""

from ..models import PageInfo
from .relations import PageRelations, RelationsGraph


def parent_of(relations: PageRelations | None) -> str | None:
    """The page this one is contained in: first ntpp target, else first tpp target."""
    if relations is None:
        return None
    if relations.ntpp:
        return relations.ntpp[0]
    if relations.tpp:
        return relations.tpp[0]
    return None


def get_breadcrumbs(slug: str, graph: RelationsGraph) -> list[PageInfo]:
    """Get the breadcrumb trail for a page by walking up its containers.

    Returns pages from root to ``slug`` (inclusive). The walk stops at a page
    without a container, at a container that is not a known page, or when a
    page repeats.
    """
    breadcrumbs: list[PageInfo] = []
    visited = set()
    current: str | None = slug

    while current and current not in visited:
        visited.add(current)
        info = graph.info(current)
        if info is not None:
            breadcrumbs.insert(0, info)
        current = parent_of(graph.get(current))

    return breadcrumbs
