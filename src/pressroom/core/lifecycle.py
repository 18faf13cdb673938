#!/usr/bin/env python3
"""
Purpose:
    Assigns a lifecycle state to a parsed and identified document based on the
    collection it was loaded from, and enforces what each state requires.

    published-collection: a filename date and a `layout` are mandatory.
    draft-collection:     both are optional; a missing layout becomes `default`.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pressroom.core.constants import DEFAULT_LAYOUT, LAYOUT_KEY
from pressroom.core.document.document import Document, DocumentIdentifier, LifecycleState
from pressroom.core.document.frontmatter import ParsedDocument
from pressroom.core.document.identity import ResolvedIdentity
from pressroom.core.errors import MissingLayout, MissingPublicationDate


class Collection(str, Enum):
    PUBLISHED = "published-collection"
    DRAFT = "draft-collection"


# --- Public API --- #

def classify(
    parsed: ParsedDocument,
    identity: ResolvedIdentity,
    collection: Collection,
    storage_path: Optional[str] = None,
) -> Document:
    """
    Build the classified `Document`.

    Raises:
        MissingPublicationDate: published document without a filename date
        MissingLayout: published document without a `layout` key
    """
    collection = Collection(collection)
    layout = (parsed.metadata.get(LAYOUT_KEY) or "").strip()

    if collection is Collection.PUBLISHED:
        if identity.publication_date is None:
            raise MissingPublicationDate(storage_path)
        if not layout:
            raise MissingLayout(storage_path)
        state = LifecycleState.PUBLISHED
    else:
        layout = layout or DEFAULT_LAYOUT
        state = LifecycleState.DRAFT

    return Document(
        identifier=DocumentIdentifier(publication_date=identity.publication_date, slug=identity.slug),
        metadata=dict(parsed.metadata),
        body=parsed.body,
        lifecycle_state=state,
        layout=layout,
        storage_path=storage_path,
    )
