"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest

from wikigraph.graph.relations import RelationsGraph
from wikigraph.models import DeclaredRelations, Page
from wikigraph.pages.loader import PageStore, load_pages


def write_page(
    content: Path,
    name: str,
    *,
    title: str | None = None,
    body: str = "",
    suffix: str = ".mdx",
    **fields,
) -> Path:
    """Write a content page with YAML frontmatter; list values use flow style.

    ``name`` is the file path relative to ``content`` without the suffix, so a
    frontmatter ``slug`` can be passed through ``fields``.
    """
    path = content / f"{name}{suffix}"
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = ["---", f"title: {title or name.title()}"]
    for key, value in fields.items():
        if isinstance(value, (list, tuple)):
            lines.append(f"{key}: [{', '.join(value)}]")
        else:
            lines.append(f"{key}: {value}")
    lines += ["---", "", body, ""]

    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def make_page(slug: str, *, title: str | None = None, body: str = "", **relations) -> Page:
    """Build an in-memory page; relation keyword args use frontmatter names."""
    return Page(
        slug=slug,
        title=title or slug.title(),
        body=body,
        relations=DeclaredRelations.from_frontmatter(relations),
    )


@pytest.fixture
def content_path(tmp_path: Path) -> Path:
    """Empty content directory laid out like an Astro site."""
    path = tmp_path / "src" / "content" / "pages"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def site(content_path: Path) -> Path:
    """A small wiki: a containment tree, a sequence, overlaps, and body links."""
    write_page(content_path, "index", title="Home", body="Start at [Guides](/guides/).")
    write_page(
        content_path,
        "guides/index",
        title="Guides",
        description="All guides",
        ntpp=["index"],
    )
    write_page(
        content_path,
        "guides/setup",
        title="Setup",
        ntpp=["guides"],
        next="guides/usage",
        body="See [usage](./guides/usage) and [home](/).",
    )
    write_page(
        content_path,
        "guides/usage",
        title="Usage",
        tpp=["guides"],
        po=["reference"],
        body="Back to [setup](/guides/setup), docs at [site](https://example.com).",
    )
    write_page(content_path, "reference", title="Reference", eq=["glossary"])
    write_page(content_path, "glossary", title="Glossary", eq=["reference"], dc=["guides/setup"])
    return content_path


@pytest.fixture
def site_store(site: Path) -> PageStore:
    return load_pages(site)


@pytest.fixture
def site_graph(site_store: PageStore) -> RelationsGraph:
    return RelationsGraph.from_pages(site_store)


@pytest.fixture
def page_factory() -> Callable[..., Page]:
    return make_page


@pytest.fixture
def page_writer() -> Callable[..., Path]:
    return write_page
