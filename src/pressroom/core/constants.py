#!/usr/bin/env python3
"""
Core constants used across Pressroom.

- Front matter: start/end markers of the metadata block.
- Identity: filename and slug patterns.
- Lifecycle: the layout drafts fall back to.
- File handling: supported extensions and default text encoding.
"""

import re
from typing import Final

# --- Front matter --- #

# The metadata block must open with this line at offset 0
FRONT_MATTER_START: Final[str] = "---"

# Lines accepted as the end of the metadata block (YAML document end included)
FRONT_MATTER_END: Final[frozenset[str]] = frozenset({"---", "..."})

# Metadata keys with meaning to the pipeline
LAYOUT_KEY: Final[str] = "layout"
TITLE_KEY: Final[str] = "title"
DATE_KEY: Final[str] = "date"
SLUG_KEY: Final[str] = "slug"

# --- Lifecycle --- #

# Layout assigned to drafts that do not declare one
DEFAULT_LAYOUT: Final[str] = "default"

# Slug for undated files whose stem normalises to nothing
FALLBACK_SLUG: Final[str] = "untitled"

# --- File handling --- #

# Default text encoding
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"

# Document extensions picked up from the collection directories
DEFAULT_DOCUMENT_EXT: Final[tuple[str, ...]] = (".md", ".markdown", ".html", ".txt")


# --- Regular Expressions --- #

# Dated filename: YYYY-MM-DD-<slug>.<ext>; the date groups are checked separately
DATED_FILENAME_RE: re.Pattern[str] = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.*)\.(?P<ext>[^.]+)$"
)

# Undated filename: <stem>.<ext>
UNDATED_FILENAME_RE: re.Pattern[str] = re.compile(r"^(?P<slug>.*)\.(?P<ext>[^.]+)$")

# Slugs: lowercase letters and digits, single hyphens between words
SLUG_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# Runs of characters that become a single hyphen when normalising a slug
SLUG_SEPARATOR_RE: re.Pattern[str] = re.compile(r"[^a-z0-9]+")

# Leading date of a metadata `date:` value (e.g. "2018-02-09 10:00:00 +0000")
METADATA_DATE_RE: re.Pattern[str] = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")
