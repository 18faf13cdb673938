#!/usr/bin/env python3
"""
Purpose:
    Derives a document's identity (publication date + slug) from its storage
    path and checks that dates or slugs declared in its metadata agree.

    Dated filenames follow `<YYYY>-<MM>-<DD>-<slug>.<ext>`. Any other filename
    is undated and its stem, normalised, is used as the slug.
"""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from datetime import date
from pathlib import PurePosixPath
from typing import Mapping, Optional

from pressroom.core.constants import (
    DATE_KEY,
    DATED_FILENAME_RE,
    FALLBACK_SLUG,
    METADATA_DATE_RE,
    SLUG_ALLOWED_RE,
    SLUG_KEY,
    SLUG_SEPARATOR_RE,
    UNDATED_FILENAME_RE,
)
from pressroom.core.errors import (
    InconsistentMetadata,
    InvalidDateInPath,
    InvalidSlug,
)


@dataclass(frozen=True)
class ResolvedIdentity:
    """Identity as read from the path. `publication_date` is None for undated files."""
    publication_date: Optional[date]
    slug: str


# --- Public API --- #

def resolve_identity(storage_path: str) -> ResolvedIdentity:
    """
    Extract (publication_date, slug) from the final component of `storage_path`.

    Raises:
        InvalidDateInPath: the filename has a date prefix that is not a real date
        InvalidSlug: a dated filename's slug is empty or has characters outside [a-z0-9-]

    Undated filenames never raise: their stem is normalised with `slugify`
    and the missing date is left for the lifecycle classifier to judge.
    """
    filename = _filename(storage_path)

    match = DATED_FILENAME_RE.fullmatch(filename)
    if match:
        published_on = _calendar_date(match["year"], match["month"], match["day"], storage_path)
        return ResolvedIdentity(publication_date=published_on, slug=_checked_slug(match["slug"], storage_path))

    match = UNDATED_FILENAME_RE.fullmatch(filename)
    stem = match["slug"] if match else filename
    return ResolvedIdentity(publication_date=None, slug=slugify(stem))


def slugify(text: str) -> str:
    """
    Normalise free text into a slug.

    Example:
        "My Draft (v2)" -> "my-draft-v2"; "Café" -> "cafe"; "___" -> "untitled"
    """
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = SLUG_SEPARATOR_RE.sub("-", ascii_text.lower()).strip("-")
    return slug or FALLBACK_SLUG


def is_valid_slug(slug: str) -> bool:
    """Return True if `slug` is non-empty lowercase words joined by single hyphens."""
    return bool(SLUG_ALLOWED_RE.fullmatch(slug))


def check_metadata_consistency(
    identity: ResolvedIdentity,
    metadata: Mapping[str, str],
    storage_path: Optional[str] = None,
) -> None:
    """
    Ensure `date:` and `slug:` metadata, when present, match the path identity.

    Only the leading YYYY-MM-DD of a `date:` value is compared, so a time of
    day may follow it. Undated paths accept any declared date.

    Raises:
        InconsistentMetadata: declared date or slug contradicts the path
    """
    declared_slug = metadata.get(SLUG_KEY)
    if declared_slug is not None and declared_slug.strip() != identity.slug:
        raise InconsistentMetadata(
            f"metadata slug {declared_slug!r} does not match filename slug {identity.slug!r}",
            storage_path,
        )

    declared_date = metadata.get(DATE_KEY)
    if declared_date is None or identity.publication_date is None:
        return

    match = METADATA_DATE_RE.match(declared_date)
    if not match:
        raise InconsistentMetadata(f"metadata date {declared_date!r} is not YYYY-MM-DD", storage_path)
    try:
        parsed = date(int(match[1]), int(match[2]), int(match[3]))
    except ValueError as e:
        raise InconsistentMetadata(f"metadata date {declared_date!r} is not a valid date", storage_path) from e
    if parsed != identity.publication_date:
        raise InconsistentMetadata(
            f"metadata date {parsed.isoformat()} does not match filename date "
            f"{identity.publication_date.isoformat()}",
            storage_path,
        )


# --- Internals --- #

def _filename(storage_path: str) -> str:
    # storage paths use '/' regardless of platform
    return PurePosixPath(str(storage_path).replace("\\", "/")).name


def _calendar_date(year: str, month: str, day: str, storage_path: str) -> date:
    try:
        return date(int(year), int(month), int(day))
    except ValueError as e:
        raise InvalidDateInPath(f"{year}-{month}-{day} is not a valid calendar date ({e})", storage_path) from e


def _checked_slug(slug: str, storage_path: str) -> str:
    if not is_valid_slug(slug):
        raise InvalidSlug(slug, storage_path)
    return slug
