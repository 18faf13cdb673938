#!/usr/bin/env python3
"""
Shared helpers for CLI commands: reading the collections named by the
context (or per-run overrides) and running ingestion.
"""
from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from pressroom.core.app_context import AppContext
from pressroom.core.errors import DuplicateDocumentIdentity, UnreadableDocument
from pressroom.core.ingest import IngestionFailure, IngestionResult, ingest
from pressroom.core.sources import SourceDocument, load_sources


def collection_dirs(args, ctx: AppContext) -> Tuple[Path, Path]:
    """Prefer CLI-provided directories for this run; otherwise use the context config."""
    posts = getattr(args, "posts_dir", None) or ctx.posts_dir
    drafts = getattr(args, "drafts_dir", None) or ctx.drafts_dir
    return Path(posts), Path(drafts)


def read_sources(args, ctx: AppContext) -> Tuple[List[SourceDocument], List[UnreadableDocument]]:
    """Read both collections; unreadable files are returned apart instead of aborting."""
    posts, drafts = collection_dirs(args, ctx)
    unreadable: List[UnreadableDocument] = []
    sources = load_sources(posts, drafts, ctx.config.get("extensions"), errors=unreadable)
    return sources, unreadable


def run_ingestion(
    sources: List[SourceDocument],
    unreadable: Sequence[UnreadableDocument] = (),
) -> Optional[IngestionResult]:
    """
    Ingest and print per-document failures, unreadable files included.
    Returns None when the run was aborted by a duplicate published identity.
    """
    try:
        result = ingest(sources)
    except DuplicateDocumentIdentity as e:
        print(f"Ingestion aborted: duplicate published identity {e.identifier!r}")
        for p in e.storage_paths:
            print(f"  - {p}")
        return None

    read_failures = tuple(IngestionFailure(storage_path=e.storage_path, error=e) for e in unreadable)
    result = dataclasses.replace(result, failures=read_failures + result.failures)
    for failure in result.failures:
        print(f"  - {failure}")
    return result
