"""Markdown link extraction for internal cross-references."""

import re
from collections.abc import Container, Iterator

from ..models import INDEX_SLUG

# Match [label](target); no nested brackets, no closing paren inside target
MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# Any URI scheme (https:, ftp:, mailto:, ...) marks an external link
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def iter_links(body: str) -> Iterator[tuple[str, str]]:
    """Yield ``(label, target)`` for every bracket link in ``body``.

    Text that does not form a complete ``[label](target)`` is skipped.
    """
    for match in MARKDOWN_LINK_PATTERN.finditer(body or ""):
        yield match.group(1), match.group(2)


def normalize_href(href: str) -> str | None:
    """Normalize a link target to a site path such as ``/topic/page``.

    Returns None for targets that do not point inside the site: external
    URLs, protocol-relative URLs, in-page anchors and mailto links.
    """
    target = href.strip()
    if not target or target.startswith("#") or target.startswith("//"):
        return None
    if _SCHEME_PATTERN.match(target):
        return None

    if target.startswith("./"):
        target = target[2:]
    if not target.startswith("/"):
        target = "/" + target
    if target.endswith("/") and target != "/":
        target = target[:-1]
    return target


def path_to_slug(path: str) -> str:
    """Map a normalized site path to a page slug."""
    if path == "/":
        return INDEX_SLUG
    return path[1:] if path.startswith("/") else path


def slug_to_path(slug: str) -> str:
    """Map a page slug to its site path."""
    return "/" if slug == INDEX_SLUG else f"/{slug}"


def extract_links(body: str, source_slug: str, known_slugs: Container[str]) -> list[str]:
    """Extract internal link targets from a page body.

    Args:
        body: Raw page body (markdown/MDX)
        source_slug: Slug of the page the body belongs to
        known_slugs: Slugs of every page in the store

    Returns:
        Target slugs in first-occurrence order, deduplicated, excluding
        self-references and slugs that name no known page.
    """
    seen = set()
    result = []
    for _label, href in iter_links(body):
        path = normalize_href(href)
        if path is None:
            continue
        slug = path_to_slug(path)
        if slug == source_slug or slug in seen or slug not in known_slugs:
            continue
        seen.add(slug)
        result.append(slug)
    return result
