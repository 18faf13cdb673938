#!/usr/bin/env python3
"""
Purpose:
    The corpus index: the complete, immutable result of one ingestion run.

    Published documents form the public listing, ordered newest first with
    ties broken by slug. Drafts are kept apart for preview tooling and never
    appear in the listing. Any document can be looked up by identifier.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from pressroom.core.constants import TITLE_KEY
from pressroom.core.document.document import Document, DocumentIdentifier
from pressroom.core.errors import DuplicateDocumentIdentity, UnknownLayout
from pressroom.core.render.layouts import resolve_layout

logger = logging.getLogger(__name__)

IdentifierLike = Union[DocumentIdentifier, str]


@dataclass(frozen=True)
class PublishedView:
    """What a renderer receives for one published document."""
    identifier: DocumentIdentifier
    metadata: Mapping[str, str]
    body: str
    layout_handle: Any

    @property
    def title(self) -> Optional[str]:
        return self.metadata.get(TITLE_KEY)


class CorpusIndex:
    """
    Ordered published listing plus a separate draft set.

    Build with `CorpusIndex.build(documents)`; the constructor assumes its
    inputs are already validated and ordered.

    Example
    -------
    >>> index = CorpusIndex.build(classified_documents)
    >>> [str(d.identifier) for d in index.published]
    ['2018-02-09-a', '2018-02-09-b', '2017-12-31-older']
    """

    def __init__(self, published: Tuple[Document, ...], drafts: Tuple[Document, ...]):
        self._published = published
        self._drafts = drafts
        self._positions: Dict[DocumentIdentifier, int] = {d.identifier: i for i, d in enumerate(published)}
        self._published_lookup: Dict[str, Document] = {d.identifier.key: d for d in published}
        self._draft_lookup: Dict[str, Document] = {}
        for d in drafts:
            self._draft_lookup.setdefault(d.identifier.key, d)

    # --- Construction --- #

    @classmethod
    def build(cls, documents: Iterable[Document]) -> "CorpusIndex":
        """
        Partition and order classified documents.

        Raises:
            DuplicateDocumentIdentity: two published documents share (date, slug)
        """
        groups: Dict[DocumentIdentifier, List[Document]] = {}
        drafts: List[Document] = []
        for doc in documents:
            if doc.is_published:
                groups.setdefault(doc.identifier, []).append(doc)
            else:
                drafts.append(doc)

        clashes = sorted((ident for ident, docs in groups.items() if len(docs) > 1), key=DocumentIdentifier.sort_key)
        if clashes:
            for ident in clashes[1:]:
                logger.error("Duplicate published identity %s: %s", ident, _paths(groups[ident]))
            first = clashes[0]
            raise DuplicateDocumentIdentity(first.key, _paths(groups[first]))

        published = tuple(sorted((docs[0] for docs in groups.values()), key=lambda d: d.identifier.sort_key()))
        return cls(published=published, drafts=tuple(drafts))

    # --- Query API --- #

    @property
    def published(self) -> Tuple[Document, ...]:
        """Public listing: date descending, slug ascending for equal dates."""
        return self._published

    @property
    def drafts(self) -> Tuple[Document, ...]:
        """Draft documents, in no particular order. Never part of the listing."""
        return self._drafts

    def get(self, identifier: IdentifierLike) -> Optional[Document]:
        """Look up a published or draft document by identifier or `YYYY-MM-DD-slug` key."""
        key = identifier.key if isinstance(identifier, DocumentIdentifier) else str(identifier)
        doc = self._published_lookup.get(key)
        return doc if doc is not None else self._draft_lookup.get(key)

    def require(self, identifier: IdentifierLike) -> Document:
        doc = self.get(identifier)
        if doc is None:
            raise LookupError(f"No document with identifier {str(identifier)!r}")
        return doc

    def neighbours(self, identifier: IdentifierLike) -> Tuple[Optional[Document], Optional[Document]]:
        """
        Return (newer, older) published neighbours of a published document,
        i.e. the previous and next entries of the listing.
        """
        doc = self.require(identifier)
        pos = self._positions.get(doc.identifier)
        if pos is None or not doc.is_published:
            raise LookupError(f"{doc.identifier} is not in the published listing")
        newer = self._published[pos - 1] if pos > 0 else None
        older = self._published[pos + 1] if pos + 1 < len(self._published) else None
        return newer, older

    def published_views(self, registry: Mapping[str, Any]) -> Tuple[Tuple[PublishedView, ...], List[UnknownLayout]]:
        """
        Resolve each published document's layout against `registry`.

        Documents whose layout is unknown are left out of the views and
        reported in the second element; the others are unaffected.
        """
        views: List[PublishedView] = []
        failures: List[UnknownLayout] = []
        for doc in self._published:
            try:
                handle = resolve_layout(doc.layout, registry, doc.storage_path)
            except UnknownLayout as e:
                logger.warning("Skipping %s: %s", doc.identifier, e.message)
                failures.append(e)
                continue
            views.append(
                PublishedView(
                    identifier=doc.identifier,
                    metadata=MappingProxyType(dict(doc.metadata)),
                    body=doc.body,
                    layout_handle=handle,
                )
            )
        return tuple(views), failures

    # --- Container protocol (published listing) --- #

    def __iter__(self) -> Iterator[Document]:
        return iter(self._published)

    def __len__(self) -> int:
        return len(self._published)

    def __repr__(self) -> str:
        return f"<CorpusIndex published={len(self._published)} drafts={len(self._drafts)}>"


def _paths(docs: Iterable[Document]) -> List[str]:
    return [d.storage_path or str(d.identifier) for d in docs]
