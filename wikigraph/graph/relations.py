"""Relation graph construction with bidirectional inference."""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import asdict, dataclass, field
from types import MappingProxyType

from ..models import DECLARED_KINDS, Page, PageInfo
from ..pages.links import extract_links

logger = logging.getLogger(__name__)

# Forward relation -> the set its inverse lands in on the target page
INVERSE_OF = {
    "ntpp": "nttpi",
    "tpp": "tppi",
    "po": "po",
    "ec": "ec",
    "eq": "eq",
    "dc": "dc",
    "r": "ri",
}

SET_FIELDS = ("ntpp", "nttpi", "tpp", "tppi", "po", "ec", "eq", "dc", "r", "ri")


@dataclass(frozen=True)
class PageRelations:
    """Resolved relations of one page after inference."""

    ntpp: tuple[str, ...] = ()
    nttpi: tuple[str, ...] = ()  # inferred only
    tpp: tuple[str, ...] = ()
    tppi: tuple[str, ...] = ()  # inferred only
    po: tuple[str, ...] = ()
    ec: tuple[str, ...] = ()
    eq: tuple[str, ...] = ()
    dc: tuple[str, ...] = ()
    next: str | None = None
    prev: str | None = None
    r: tuple[str, ...] = ()  # pages this one links to
    ri: tuple[str, ...] = ()  # inferred only

    @property
    def connections(self) -> int:
        """Total degree: every relation-set size plus next/prev presence."""
        total = sum(len(getattr(self, name)) for name in SET_FIELDS)
        return total + (1 if self.next else 0) + (1 if self.prev else 0)

    def to_dict(self) -> dict:
        data = asdict(self)
        for name in SET_FIELDS:
            data[name] = list(data[name])
        return data


@dataclass
class _RelationsDraft:
    """Mutable staging record used while inference runs."""

    ntpp: list[str] = field(default_factory=list)
    nttpi: list[str] = field(default_factory=list)
    tpp: list[str] = field(default_factory=list)
    tppi: list[str] = field(default_factory=list)
    po: list[str] = field(default_factory=list)
    ec: list[str] = field(default_factory=list)
    eq: list[str] = field(default_factory=list)
    dc: list[str] = field(default_factory=list)
    next: str | None = None
    prev: str | None = None
    r: list[str] = field(default_factory=list)
    ri: list[str] = field(default_factory=list)

    def add(self, name: str, slug: str) -> None:
        members = getattr(self, name)
        if slug not in members:
            members.append(slug)

    def freeze(self) -> PageRelations:
        return PageRelations(
            **{name: tuple(getattr(self, name)) for name in SET_FIELDS},
            next=self.next,
            prev=self.prev,
        )


def _declared_draft(page: Page, known_slugs: frozenset[str]) -> _RelationsDraft:
    """Pass 1: a page's declared relations plus its extracted body links."""
    declared = page.relations
    draft = _RelationsDraft(next=declared.next, prev=declared.prev)
    for kind in DECLARED_KINDS:
        setattr(draft, kind, list(getattr(declared, kind)))
    draft.r = extract_links(page.body or "", page.slug, known_slugs)
    return draft


def _infer_inverses(drafts: dict[str, _RelationsDraft]) -> None:
    """Pass 2: push every forward relation's inverse into its target."""
    for slug, draft in drafts.items():
        for forward, inverse in INVERSE_OF.items():
            # Symmetric sets can grow while we walk them
            for target in list(getattr(draft, forward)):
                target_draft = drafts.get(target)
                if target_draft is None:
                    continue
                target_draft.add(inverse, slug)

        if draft.next:
            next_draft = drafts.get(draft.next)
            if next_draft is not None and not next_draft.prev:
                next_draft.prev = slug

        if draft.prev:
            prev_draft = drafts.get(draft.prev)
            if prev_draft is not None and not prev_draft.next:
                prev_draft.next = slug


@dataclass(frozen=True)
class RelationsGraph:
    """Inference-complete relation graph over all pages.

    Built once per generation pass and read-only afterwards. ``relations``
    and ``pages`` share the same keys and iteration order (page store order).
    """

    relations: Mapping[str, PageRelations] = field(default_factory=dict)
    pages: Mapping[str, PageInfo] = field(default_factory=dict)

    @classmethod
    def from_pages(cls, pages: Iterable[Page]) -> "RelationsGraph":
        """Build the graph from a page store with bidirectional inference.

        Inference rules:
        - A.ntpp includes B -> B.nttpi includes A
        - A.tpp includes B -> B.tppi includes A
        - A.po/ec/eq/dc includes B -> B.po/ec/eq/dc includes A
        - A.r includes B -> B.ri includes A
        - A.next = B -> B.prev = A, unless B.prev is already set
        - A.prev = B -> B.next = A, unless B.next is already set

        Targets that name no page keep their forward entry but never get an
        inverse.
        """
        pages = list(pages)
        known_slugs = frozenset(page.slug for page in pages)

        infos: dict[str, PageInfo] = {}
        drafts: dict[str, _RelationsDraft] = {}
        for page in pages:
            if page.slug in drafts:
                logger.warning("Duplicate slug %r ignored while building relations", page.slug)
                continue
            infos[page.slug] = PageInfo(slug=page.slug, title=page.title)
            drafts[page.slug] = _declared_draft(page, known_slugs)

        _infer_inverses(drafts)

        frozen = {slug: draft.freeze() for slug, draft in drafts.items()}
        logger.debug("Built relations graph with %d pages", len(frozen))
        return cls(relations=MappingProxyType(frozen), pages=MappingProxyType(infos))

    def get(self, slug: str) -> PageRelations | None:
        """Resolved relations for a page, or None for an unknown slug."""
        return self.relations.get(slug)

    def info(self, slug: str) -> PageInfo | None:
        return self.pages.get(slug)

    def title(self, slug: str) -> str | None:
        info = self.pages.get(slug)
        return info.title if info else None

    @property
    def slugs(self) -> list[str]:
        return list(self.relations)

    def __contains__(self, slug: object) -> bool:
        return slug in self.relations

    def __iter__(self) -> Iterator[str]:
        return iter(self.relations)

    def __len__(self) -> int:
        return len(self.relations)
