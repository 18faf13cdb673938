#!/usr/bin/env python3
from datetime import date

import pytest
from pydantic import ValidationError

from pressroom.core.document.document import Document, DocumentIdentifier, LifecycleState


def _doc(**overrides) -> Document:
    payload = dict(
        identifier=DocumentIdentifier(publication_date=date(2018, 2, 9), slug="a"),
        metadata={"layout": "post", "title": "A"},
        body="text",
        lifecycle_state=LifecycleState.PUBLISHED,
        layout="post",
        storage_path="_posts/2018-02-09-a.md",
    )
    payload.update(overrides)
    return Document(**payload)


def test_identifier_key_and_str():
    ident = DocumentIdentifier(publication_date=date(2018, 2, 9), slug="a")
    assert ident.key == "2018-02-09-a"
    assert str(ident) == "2018-02-09-a"
    assert DocumentIdentifier(slug="draft").key == "draft"


def test_identifier_sort_key_orders_newest_first_then_slug():
    idents = [
        DocumentIdentifier(publication_date=date(2017, 1, 1), slug="a"),
        DocumentIdentifier(publication_date=date(2018, 2, 9), slug="b"),
        DocumentIdentifier(slug="undated"),
        DocumentIdentifier(publication_date=date(2018, 2, 9), slug="a"),
    ]
    ordered = [i.key for i in sorted(idents, key=DocumentIdentifier.sort_key)]
    assert ordered == ["2018-02-09-a", "2018-02-09-b", "2017-01-01-a", "undated"]


def test_identifier_rejects_bad_slug():
    with pytest.raises(ValidationError):
        DocumentIdentifier(slug="Not A Slug")


def test_identifier_is_hashable_and_equal_by_value():
    a = DocumentIdentifier(publication_date=date(2018, 2, 9), slug="a")
    b = DocumentIdentifier(publication_date=date(2018, 2, 9), slug="a")
    assert a == b
    assert len({a, b}) == 1


def test_document_is_frozen():
    doc = _doc()
    with pytest.raises(ValidationError):
        doc.layout = "page"  # type: ignore[misc]


def test_storage_path_is_excluded_from_dump():
    dumped = _doc().model_dump()
    assert "storage_path" not in dumped
    assert dumped["layout"] == "post"


def test_convenience_properties():
    doc = _doc()
    assert doc.title == "A"
    assert doc.is_published and not doc.is_draft
    draft = _doc(lifecycle_state=LifecycleState.DRAFT, metadata={})
    assert draft.is_draft
    assert draft.title is None


def test_metadata_is_read_only_copy_of_input():
    source = {"layout": "post", "title": "A"}
    doc = _doc(metadata=source)
    source["title"] = "changed"
    assert doc.metadata["title"] == "A"
    with pytest.raises(TypeError):
        doc.metadata["title"] = "B"  # type: ignore[index]
    assert doc.model_dump()["metadata"] == {"layout": "post", "title": "A"}


def test_default_metadata_is_read_only():
    doc = Document(
        identifier=DocumentIdentifier(slug="a"),
        lifecycle_state=LifecycleState.DRAFT,
        layout="default",
    )
    with pytest.raises(TypeError):
        doc.metadata["layout"] = "post"  # type: ignore[index]
