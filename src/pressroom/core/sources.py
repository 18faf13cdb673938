#!/usr/bin/env python3
"""
Purpose:
    Directory traversal for the two collections. Produces the
    (storage_path, raw_text, collection) triples the ingestion pipeline
    consumes; nothing downstream touches the filesystem.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from pressroom.core.constants import DEFAULT_DOCUMENT_EXT, DEFAULT_TEXT_ENCODING
from pressroom.core.errors import UnreadableDocument
from pressroom.core.lifecycle import Collection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    """One raw document as handed to `ingest()`."""
    storage_path: str
    raw_text: str
    collection: Collection


# --- Public API --- #

def load_sources(
    posts_dir: Optional[Union[str, Path]],
    drafts_dir: Optional[Union[str, Path]] = None,
    extensions: Optional[Sequence[str]] = None,
    errors: Optional[List[UnreadableDocument]] = None,
) -> List[SourceDocument]:
    """
    Read every document under `posts_dir` (published) and `drafts_dir` (draft).

    Missing directories contribute nothing. Files are returned in a stable,
    sorted order per collection.

    Args:
        errors: collector for files that cannot be read. When given, such
            files are recorded there and skipped; otherwise the first one raises.

    Raises:
        UnreadableDocument: a file is not valid UTF-8 or cannot be read (no collector)
    """
    exts = {e.lower() for e in (extensions or DEFAULT_DOCUMENT_EXT)}
    sources: List[SourceDocument] = []
    for root, collection in ((posts_dir, Collection.PUBLISHED), (drafts_dir, Collection.DRAFT)):
        if root is None:
            continue
        sources.extend(_read_collection(Path(root), collection, exts, errors))
    return sources


def find_documents(root: Path, extensions: Iterable[str]) -> List[Path]:
    """Sorted document files under `root` (recursive); hidden files are skipped."""
    if not root.is_dir():
        return []
    exts = {e.lower() for e in extensions}
    files = [
        p for p in root.rglob("*")
        if p.is_file() and p.suffix.lower() in exts and not _is_hidden(p.relative_to(root))
    ]
    return sorted(files)


# --- Internals --- #

def _read_collection(
    root: Path,
    collection: Collection,
    exts: Iterable[str],
    errors: Optional[List[UnreadableDocument]],
) -> Iterator[SourceDocument]:
    for p in find_documents(root, exts):
        storage_path = p.as_posix()
        try:
            raw_text = p.read_text(encoding=DEFAULT_TEXT_ENCODING)
        except (UnicodeDecodeError, OSError) as e:
            err = UnreadableDocument(f"cannot read document ({e})", storage_path)
            if errors is None:
                raise err from e
            logger.warning("Skipping unreadable %s: %s", storage_path, e)
            errors.append(err)
            continue
        yield SourceDocument(storage_path=storage_path, raw_text=raw_text, collection=collection)


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)
