"""Content loading: the page store the graph is built from."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterator

import frontmatter

from ..models import INDEX_SLUG, DeclaredRelations, Page

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".mdx", ".md")


@dataclass
class PageStore:
    """Read-only container for all loaded pages, in discovery order."""

    path: Path | None = None
    pages: list[Page] = field(default_factory=list)

    # Lookup table built after loading
    _by_slug: dict[str, Page] = field(default_factory=dict)

    def __post_init__(self):
        self._build_lookups()

    def _build_lookups(self):
        self._by_slug = {}
        for page in self.pages:
            self._by_slug.setdefault(page.slug, page)

    def get(self, slug: str) -> Page | None:
        return self._by_slug.get(slug)

    @property
    def slugs(self) -> frozenset[str]:
        return frozenset(self._by_slug)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    def __len__(self) -> int:
        return len(self.pages)


def slug_from_path(path: Path, content_path: Path) -> str:
    """Derive a slug from a file's path relative to the content directory.

    ``guides/setup.mdx`` becomes ``guides/setup``; a nested ``index`` file
    takes its directory's slug, and the top-level ``index`` stays ``index``.
    """
    rel = path.relative_to(content_path).with_suffix("")
    parts = list(rel.parts)
    if len(parts) > 1 and parts[-1] == INDEX_SLUG:
        parts = parts[:-1]
    return "/".join(parts)


def _coerce_date(value: Any, key: str, path: Path) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.warning("Ignoring invalid %s date %r in %s", key, value, path)
        return None


def _title_from_body(body: str) -> str | None:
    for line in body.split("\n"):
        if line.startswith("# "):
            return line[2:].strip()
    return None


def load_page(path: Path, content_path: Path) -> Page:
    """Load a single content file and parse its frontmatter."""
    post = frontmatter.load(path)

    fm = post.metadata
    body = post.content or ""

    slug = fm.get("slug")
    if not isinstance(slug, str) or not slug.strip():
        slug = slug_from_path(path, content_path)
    slug = slug.strip().strip("/") or INDEX_SLUG

    title = fm.get("title")
    if not isinstance(title, str) or not title.strip():
        title = _title_from_body(body) or path.stem
        logger.debug("No title in frontmatter of %s, using %r", path, title)

    description = fm.get("description")
    description = str(description) if description is not None else None

    return Page(
        slug=slug,
        title=title.strip(),
        body=body,
        path=path,
        description=description,
        created=_coerce_date(fm.get("created"), "created", path),
        modified=_coerce_date(fm.get("modified"), "modified", path),
        relations=DeclaredRelations.from_frontmatter(fm),
        frontmatter=dict(fm),
    )


def load_pages(content_path: Path, extensions: tuple[str, ...] = DEFAULT_EXTENSIONS) -> PageStore:
    """Load all content pages below ``content_path``.

    Files are visited in sorted relative-path order so that repeated loads
    produce the same store. Files that fail to parse are skipped with a
    warning; the first file claiming a slug wins.

    Args:
        content_path: Path to the content directory
        extensions: File suffixes treated as pages

    Returns:
        PageStore with every successfully loaded page
    """
    suffixes = {ext.lower() for ext in extensions}
    store = PageStore(path=content_path)
    seen: dict[str, Path] = {}

    files = sorted(
        (p for p in content_path.rglob("*") if p.is_file() and p.suffix.lower() in suffixes),
        key=lambda p: p.relative_to(content_path).as_posix(),
    )

    for page_file in files:
        # Skip hidden files and directories
        if any(part.startswith(".") for part in page_file.relative_to(content_path).parts):
            continue

        try:
            page = load_page(page_file, content_path)
        except Exception as e:
            logger.warning("Failed to load %s: %s", page_file, e)
            continue

        if page.slug in seen:
            logger.warning(
                "Duplicate slug %r in %s (already defined by %s), skipping",
                page.slug,
                page_file,
                seen[page.slug],
            )
            continue

        seen[page.slug] = page_file
        store.pages.append(page)

    store._build_lookups()
    logger.debug("Loaded %d pages from %s", len(store.pages), content_path)

    return store
