#!/usr/bin/env python3
"""
Purpose:
    Error taxonomy for the Pressroom ingestion pipeline. Every error carries
    the storage path of the document it concerns so that reports point at the
    offending file.

    Stage groups:
        UnreadableDocument (read time, per file)
        ParseError      -> DuplicateMetadataKey, UnterminatedMetadataBlock, MalformedMetadataBlock
        IdentityError   -> InvalidDateInPath, InvalidSlug, InconsistentMetadata
        LifecycleError  -> MissingPublicationDate, MissingLayout
        UnknownLayout   (resolution time, per document)
        DuplicateDocumentIdentity (index build time, aborts the run)
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple


class PressroomError(Exception):
    """Base class for pipeline errors. `storage_path` may be None for pure calls."""

    def __init__(self, message: str, storage_path: Optional[str] = None):
        self.message = message
        self.storage_path = storage_path
        super().__init__(f"{storage_path}: {message}" if storage_path else message)

    def with_path(self, storage_path: str) -> "PressroomError":
        """Attach a storage path if the raiser did not know it."""
        if self.storage_path is None:
            self.storage_path = storage_path
            self.args = (f"{storage_path}: {self.message}",)
        return self


# --- Read time --- #

class UnreadableDocument(PressroomError):
    """The file could not be read or decoded as text."""


# --- Parse time --- #

class ParseError(PressroomError, ValueError):
    pass


class DuplicateMetadataKey(ParseError):
    def __init__(self, key: str, storage_path: Optional[str] = None):
        self.key = key
        super().__init__(f"metadata key {key!r} appears more than once", storage_path)


class UnterminatedMetadataBlock(ParseError):
    def __init__(self, storage_path: Optional[str] = None):
        super().__init__("metadata block has no closing marker", storage_path)


class MalformedMetadataBlock(ParseError):
    """The block is delimited correctly but is not a flat key/value mapping."""


# --- Identity time --- #

class IdentityError(PressroomError, ValueError):
    pass


class InvalidDateInPath(IdentityError):
    pass


class InvalidSlug(IdentityError):
    def __init__(self, slug: str, storage_path: Optional[str] = None):
        self.slug = slug
        super().__init__(
            f"invalid slug {slug!r}: expected lowercase letters, digits and hyphens",
            storage_path,
        )


class InconsistentMetadata(IdentityError):
    """Metadata declares a date or slug that disagrees with the storage path."""


# --- Lifecycle time --- #

class LifecycleError(PressroomError, ValueError):
    pass


class MissingPublicationDate(LifecycleError):
    def __init__(self, storage_path: Optional[str] = None):
        super().__init__("published document has no date in its filename", storage_path)


class MissingLayout(LifecycleError):
    def __init__(self, storage_path: Optional[str] = None):
        super().__init__("published document does not declare a layout", storage_path)


# --- Resolution time --- #

class UnknownLayout(PressroomError, LookupError):
    def __init__(self, layout: str, storage_path: Optional[str] = None):
        self.layout = layout
        super().__init__(f"no layout named {layout!r}", storage_path)


# --- Index build time --- #

class DuplicateDocumentIdentity(PressroomError):
    """Two or more published documents share (publication_date, slug). Fatal to the run."""

    def __init__(self, identifier: str, storage_paths: Iterable[str]):
        self.identifier = identifier
        self.storage_paths: Tuple[str, ...] = tuple(storage_paths)
        joined = ", ".join(self.storage_paths)
        super().__init__(
            f"published identity {identifier!r} is claimed by: {joined}",
            self.storage_paths[0] if self.storage_paths else None,
        )
