#!/usr/bin/env python3
"""
Purpose:
    Runs the ingestion pipeline over a batch of raw documents:

        parse -> identify -> metadata consistency -> classify -> index

    Per-document failures are recorded and the document is dropped; the run
    goes on. The index is built once every document has been classified, so
    a duplicate published identity is detected over the complete set and
    aborts the run with no corpus produced.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from pressroom.core.corpus import CorpusIndex
from pressroom.core.document.document import Document
from pressroom.core.document.frontmatter import parse_document
from pressroom.core.document.identity import check_metadata_consistency, resolve_identity
from pressroom.core.errors import PressroomError
from pressroom.core.lifecycle import classify
from pressroom.core.sources import SourceDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionFailure:
    """A document excluded from the corpus, and why."""
    storage_path: str
    error: PressroomError

    @property
    def kind(self) -> str:
        return type(self.error).__name__

    def __str__(self) -> str:
        return f"{self.storage_path}: {self.kind}: {self.error.message}"


@dataclass(frozen=True)
class IngestionResult:
    corpus: CorpusIndex
    failures: Tuple[IngestionFailure, ...] = ()

    def is_clean(self) -> bool:
        return not self.failures


# --- Public API --- #

def process_document(source: SourceDocument) -> Document:
    """
    Parse, identify and classify a single document. Pure; safe to run in parallel.

    Raises:
        PressroomError: any parse, identity or lifecycle error for this document
    """
    path = source.storage_path
    parsed = parse_document(source.raw_text, storage_path=path)
    identity = resolve_identity(path)
    check_metadata_consistency(identity, parsed.metadata, storage_path=path)
    return classify(parsed, identity, source.collection, storage_path=path)


def ingest(sources: Iterable[SourceDocument], *, strict: bool = False) -> IngestionResult:
    """
    Ingest `sources` into a fresh `CorpusIndex`.

    Args:
        sources: (storage_path, raw_text, collection) triples
        strict: raise the first per-document error instead of recording it

    Raises:
        DuplicateDocumentIdentity: published documents share (date, slug); no corpus is built
        PressroomError: only when `strict` is True
    """
    classified: List[Document] = []
    failures: List[IngestionFailure] = []

    for source in sources:
        try:
            doc = process_document(source)
        except PressroomError as e:
            if strict:
                raise
            e.with_path(source.storage_path)
            logger.warning("Excluded %s: %s", source.storage_path, e.message)
            failures.append(IngestionFailure(storage_path=source.storage_path, error=e))
            continue
        logger.debug("Classified %s as %s (%s)", source.storage_path, doc.lifecycle_state.value, doc.identifier)
        classified.append(doc)

    corpus = CorpusIndex.build(classified)
    logger.info(
        "Ingested %d published, %d draft, %d failed",
        len(corpus.published), len(corpus.drafts), len(failures),
    )
    return IngestionResult(corpus=corpus, failures=tuple(failures))


def summarize(result: Optional[IngestionResult], total: int) -> str:
    """One-line summary in the CLI's `N/M documents passed` form."""
    passed = 0 if result is None else total - len(result.failures)
    return f"{passed}/{total} documents passed."
