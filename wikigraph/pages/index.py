"""Site-wide JSON indexes consumed by the page layer (popups, backlinks)."""

from collections.abc import Iterable

from ..models import Page
from .links import iter_links, normalize_href, path_to_slug, slug_to_path


def build_popup_index(pages: Iterable[Page]) -> dict[str, dict[str, str]]:
    """Map each page's URL path to its popup preview data.

    The ``description`` key is present only for pages that declare one.
    """
    index: dict[str, dict[str, str]] = {}
    for page in pages:
        entry = {"title": page.title}
        if page.description is not None:
            entry["description"] = page.description
        index[page.url_path] = entry
    return index


def build_backlinks(pages: Iterable[Page]) -> dict[str, list[dict[str, str]]]:
    """Map each page's URL path to the pages whose body links to it.

    Every page gets an entry, empty when nothing links to it. Sources are
    listed in page order without duplicates; self-links and links to paths
    that are not pages are ignored. Targets resolve through the page slug, so
    ``/index`` counts as a link to ``/``.
    """
    pages = list(pages)
    backlinks: dict[str, list[dict[str, str]]] = {page.url_path: [] for page in pages}

    for page in pages:
        source_path = page.url_path
        for _label, href in iter_links(page.body):
            target_path = normalize_href(href)
            if target_path is None:
                continue
            target_path = slug_to_path(path_to_slug(target_path))
            if target_path == source_path:
                continue
            sources = backlinks.get(target_path)
            if sources is None:
                continue
            if any(bl["path"] == source_path for bl in sources):
                continue
            sources.append({"path": source_path, "title": page.title})

    return backlinks
