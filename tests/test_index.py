from wikigraph.pages.index import build_backlinks, build_popup_index


def test_popup_index_maps_paths(site_store) -> None:
    index = build_popup_index(site_store)
    assert index["/"] == {"title": "Home"}
    assert index["/guides"] == {"title": "Guides", "description": "All guides"}
    assert set(index) == {"/", "/guides", "/guides/setup", "/guides/usage", "/reference", "/glossary"}


def test_backlinks_cover_every_page(site_store) -> None:
    backlinks = build_backlinks(site_store)
    assert set(backlinks) == {p.url_path for p in site_store}
    assert backlinks["/reference"] == []


def test_backlinks_list_linking_pages(site_store) -> None:
    backlinks = build_backlinks(site_store)
    assert backlinks["/guides"] == [{"path": "/", "title": "Home"}]
    assert backlinks["/"] == [{"path": "/guides/setup", "title": "Setup"}]
    assert backlinks["/guides/setup"] == [{"path": "/guides/usage", "title": "Usage"}]


def test_backlinks_dedup_and_skip_self(page_factory) -> None:
    pages = [
        page_factory("a", body="[b](/b) [b again](./b/) [me](/a) [out](https://x.org)"),
        page_factory("b", body="[ghost](/ghost) [a](a)"),
    ]
    assert build_backlinks(pages) == {
        "/a": [{"path": "/b", "title": "B"}],
        "/b": [{"path": "/a", "title": "A"}],
    }


def test_backlinks_resolve_index_alias(page_factory) -> None:
    pages = [
        page_factory("index", title="Home"),
        page_factory("about", body="[home](/index)"),
    ]
    backlinks = build_backlinks(pages)
    assert backlinks["/"] == [{"path": "/about", "title": "About"}]
    assert backlinks["/about"] == []


def test_index_self_link_via_alias_is_skipped(page_factory) -> None:
    pages = [page_factory("index", title="Home", body="[top](/index) [root](/)")]
    assert build_backlinks(pages) == {"/": []}
