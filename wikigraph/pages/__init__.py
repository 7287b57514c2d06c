"""Page loading, link extraction, and site indexes."""

from .index import build_backlinks, build_popup_index
from .links import extract_links, iter_links, normalize_href, path_to_slug, slug_to_path
from .loader import PageStore, load_page, load_pages

__all__ = [
    "PageStore",
    "load_page",
    "load_pages",
    "extract_links",
    "iter_links",
    "normalize_href",
    "path_to_slug",
    "slug_to_path",
    "build_backlinks",
    "build_popup_index",
]
