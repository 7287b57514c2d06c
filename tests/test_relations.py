import pytest

from wikigraph.graph.relations import PageRelations, RelationsGraph
from wikigraph.models import SYMMETRIC_KINDS


def test_symmetric_relations_are_mutual(site_graph: RelationsGraph) -> None:
    for a in site_graph:
        for kind in SYMMETRIC_KINDS:
            for b in getattr(site_graph.get(a), kind):
                if b in site_graph:
                    assert a in getattr(site_graph.get(b), kind), (a, kind, b)


def test_inverse_sets_are_complete(site_graph: RelationsGraph) -> None:
    for a in site_graph:
        rel = site_graph.get(a)
        for forward, inverse in (("ntpp", "nttpi"), ("tpp", "tppi"), ("r", "ri")):
            for b in getattr(rel, forward):
                if b in site_graph:
                    assert a in getattr(site_graph.get(b), inverse), (a, forward, b)


def test_site_graph_inference(site_graph: RelationsGraph) -> None:
    assert site_graph.get("guides").nttpi == ("guides/setup",)
    assert site_graph.get("guides").tppi == ("guides/usage",)
    assert site_graph.get("index").nttpi == ("guides",)
    assert site_graph.get("reference").po == ("guides/usage",)
    assert site_graph.get("guides/setup").dc == ("glossary",)
    assert site_graph.get("guides/usage").prev == "guides/setup"
    assert site_graph.get("guides/setup").r == ("guides/usage", "index")
    assert site_graph.get("guides/usage").ri == ("guides/setup",)


def test_declared_symmetric_pair_is_not_duplicated(page_factory) -> None:
    graph = RelationsGraph.from_pages(
        [page_factory("a", eq=["b"]), page_factory("b", eq=["a"])]
    )
    assert graph.get("a").eq == ("b",)
    assert graph.get("b").eq == ("a",)


def test_next_infers_prev_and_prev_infers_next(page_factory) -> None:
    graph = RelationsGraph.from_pages(
        [page_factory("a", next="b"), page_factory("b"), page_factory("c", prev="b")]
    )
    assert graph.get("b").prev == "a"
    assert graph.get("b").next == "c"


def test_declared_prev_is_never_overwritten(page_factory) -> None:
    graph = RelationsGraph.from_pages(
        [page_factory("a", next="b"), page_factory("b", prev="d"), page_factory("d")]
    )
    assert graph.get("a").next == "b"
    assert graph.get("b").prev == "d"
    assert graph.get("d").next == "b"


def test_conflicting_next_first_processed_wins(page_factory) -> None:
    graph = RelationsGraph.from_pages(
        [page_factory("a", next="b"), page_factory("b"), page_factory("c", next="b")]
    )
    assert graph.get("b").prev == "a"
    assert graph.get("c").next == "b"


def test_unknown_targets_are_kept_without_inverse(page_factory) -> None:
    graph = RelationsGraph.from_pages([page_factory("a", ntpp=["ghost"], po=["ghost"], next="ghost")])
    rel = graph.get("a")
    assert rel.ntpp == ("ghost",)
    assert rel.po == ("ghost",)
    assert "ghost" not in graph


def test_inverse_fields_are_never_read_from_frontmatter(page_factory) -> None:
    graph = RelationsGraph.from_pages(
        [page_factory("a", nttpi=["b"], tppi=["b"], ri=["b"]), page_factory("b")]
    )
    assert graph.get("a") == PageRelations()
    assert graph.get("b") == PageRelations()


def test_missing_body_yields_no_references(page_factory) -> None:
    graph = RelationsGraph.from_pages([page_factory("a", body=None), page_factory("b")])
    assert graph.get("a").r == ()


def test_links_in_body_do_not_self_reference(page_factory) -> None:
    graph = RelationsGraph.from_pages([page_factory("a", body="[me](/a) [me again](./a/)")])
    assert graph.get("a").r == ()
    assert graph.get("a").ri == ()


def test_build_is_idempotent(site_store) -> None:
    first = RelationsGraph.from_pages(site_store)
    second = RelationsGraph.from_pages(site_store)
    assert dict(first.relations) == dict(second.relations)
    assert list(first.relations) == list(second.relations)
    assert dict(first.pages) == dict(second.pages)


def test_graph_is_read_only(site_graph: RelationsGraph) -> None:
    with pytest.raises(TypeError):
        site_graph.relations["new"] = PageRelations()  # type: ignore[index]


def test_connections_counts_every_relation(site_graph: RelationsGraph) -> None:
    rel = site_graph.get("guides/setup")
    # ntpp, dc, two r, one ri, next
    assert rel.connections == 6


def test_page_lookup(site_graph: RelationsGraph) -> None:
    assert site_graph.title("guides") == "Guides"
    assert site_graph.info("missing") is None
    assert site_graph.get("missing") is None
    assert len(site_graph) == 6
