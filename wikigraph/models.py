"""Data models for wiki pages and their declared relations."""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Literal

# Edge kinds exposed to the graph view
EdgeType = Literal["ntpp", "tpp", "po", "ec", "eq", "dc", "next", "r"]

DECLARED_KINDS: tuple[str, ...] = ("ntpp", "tpp", "po", "ec", "eq", "dc")
SYMMETRIC_KINDS: tuple[str, ...] = ("po", "ec", "eq", "dc")
EDGE_TYPES: tuple[str, ...] = ("ntpp", "tpp", "po", "ec", "eq", "dc", "next", "r")

INDEX_SLUG = "index"


def _coerce_slug_list(value: Any) -> tuple[str, ...]:
    """Coerce a frontmatter value to an ordered, duplicate-free tuple of slugs."""
    if not value:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return ()

    seen = set()
    result = []
    for entry in value:
        if not isinstance(entry, str):
            continue
        slug = entry.strip()
        if slug and slug not in seen:
            seen.add(slug)
            result.append(slug)
    return tuple(result)


def _coerce_slug(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


@dataclass(frozen=True)
class DeclaredRelations:
    """Relations a page declares in its frontmatter.

    Only the recognized keys are read; everything else in the frontmatter is
    passthrough metadata.
    """

    ntpp: tuple[str, ...] = ()  # non-tangential proper part of
    tpp: tuple[str, ...] = ()  # tangential proper part of
    po: tuple[str, ...] = ()  # partially overlaps
    ec: tuple[str, ...] = ()  # externally connected
    eq: tuple[str, ...] = ()  # equal
    dc: tuple[str, ...] = ()  # disconnected
    next: str | None = None
    prev: str | None = None

    @classmethod
    def from_frontmatter(cls, fm: dict) -> "DeclaredRelations":
        return cls(
            ntpp=_coerce_slug_list(fm.get("ntpp")),
            tpp=_coerce_slug_list(fm.get("tpp")),
            po=_coerce_slug_list(fm.get("po")),
            ec=_coerce_slug_list(fm.get("ec")),
            eq=_coerce_slug_list(fm.get("eq")),
            dc=_coerce_slug_list(fm.get("dc")),
            next=_coerce_slug(fm.get("next")),
            prev=_coerce_slug(fm.get("prev")),
        )


@dataclass(frozen=True)
class Page:
    """A content page loaded from the content directory."""

    slug: str
    title: str
    body: str = ""  # raw markdown after frontmatter
    path: Path | None = None
    description: str | None = None
    created: date | None = None
    modified: date | None = None
    relations: DeclaredRelations = field(default_factory=DeclaredRelations)
    frontmatter: dict = field(default_factory=dict, compare=False)

    @property
    def url_path(self) -> str:
        """URL path for this page; the index page is served at ``/``."""
        return "/" if self.slug == INDEX_SLUG else f"/{self.slug}"


@dataclass(frozen=True)
class PageInfo:
    """Minimal page identity used by breadcrumbs and graph nodes."""

    slug: str
    title: str

    def to_dict(self) -> dict[str, str]:
        return {"slug": self.slug, "title": self.title}
