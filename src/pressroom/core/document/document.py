#!/usr/bin/env python3
"""
Purpose:
    Represents a classified Pressroom document: parsed metadata and body, the
    identity derived from its filename, and its lifecycle state. Instances are
    frozen and their metadata is a read-only mapping, so a corpus can hand them
    to renderers without copying.
"""
from __future__ import annotations

from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from pressroom.core.constants import SLUG_ALLOWED_RE, TITLE_KEY


class LifecycleState(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class DocumentIdentifier(BaseModel):
    """
    Canonical identity of a document: (publication_date, slug).

    Ordering is the listing order: newest date first, then slug ascending.
    Undated identifiers sort after dated ones.

    Example
    -------
    >>> DocumentIdentifier(publication_date=date(2018, 2, 9), slug="a").key
    '2018-02-09-a'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    publication_date: Optional[date] = Field(default=None, description="Date from the filename, if any.")
    slug: str = Field(..., description="URL-safe token from the filename.")

    @field_validator("slug")
    @classmethod
    def _slug_is_url_safe(cls, v: str) -> str:
        if not SLUG_ALLOWED_RE.fullmatch(v):
            raise ValueError(f"invalid slug {v!r}")
        return v

    @property
    def key(self) -> str:
        """`YYYY-MM-DD-slug`, or just `slug` when undated."""
        if self.publication_date is None:
            return self.slug
        return f"{self.publication_date.isoformat()}-{self.slug}"

    def sort_key(self) -> tuple:
        dated = self.publication_date is not None
        ordinal = self.publication_date.toordinal() if dated else 0
        return (not dated, -ordinal, self.slug)

    def __str__(self) -> str:
        return self.key


class Document(BaseModel):
    """
    A document that passed parsing, identification and classification.

    `storage_path` is kept only for diagnostics and is excluded from dumps.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    identifier: DocumentIdentifier
    metadata: Mapping[str, str] = Field(default_factory=dict, validate_default=True, description="Front matter (flat, string values, read-only).")
    body: str = Field(default="", description="Text following the front matter.")
    lifecycle_state: LifecycleState
    layout: str = Field(..., description="Effective layout name used for rendering.")
    storage_path: Optional[str] = Field(default=None, exclude=True, repr=False)

    @field_validator("metadata", mode="after")
    @classmethod
    def _freeze_metadata(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        # copied so the caller keeps no handle on the stored mapping
        return MappingProxyType(dict(v))

    @field_serializer("metadata")
    def _dump_metadata(self, v: Mapping[str, str]) -> Dict[str, str]:
        return dict(v)

    # --- Convenience --- #

    @property
    def title(self) -> Optional[str]:
        return self.metadata.get(TITLE_KEY)

    @property
    def is_published(self) -> bool:
        return self.lifecycle_state is LifecycleState.PUBLISHED

    @property
    def is_draft(self) -> bool:
        return self.lifecycle_state is LifecycleState.DRAFT
