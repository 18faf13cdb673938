#!/usr/bin/env python3
"""
Purpose:
    Splits raw document text into a front matter mapping and a body.

    A document has front matter only when its very first line is the start
    marker (`---`). The block runs until the next line that is an end marker
    (`---` or `...`) and is read as flat YAML `key: value` pairs. Every value
    is kept as the literal string written in the file.

Typical use:
    >>> parsed = parse_document("---\\nlayout: post\\ntitle: Hello\\n---\\nBody\\n")
    >>> dict(parsed.metadata)
    {'layout': 'post', 'title': 'Hello'}
    >>> parsed.body
    'Body\\n'
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

import yaml

from pressroom.core.constants import FRONT_MATTER_END, FRONT_MATTER_START
from pressroom.core.errors import (
    DuplicateMetadataKey,
    MalformedMetadataBlock,
    UnterminatedMetadataBlock,
)


@dataclass(frozen=True)
class ParsedDocument:
    """Result of parsing: read-only metadata mapping plus the untouched body."""
    metadata: Mapping[str, str]
    body: str


# --- Public API --- #

def parse_document(text: str, storage_path: Optional[str] = None) -> ParsedDocument:
    """
    Split `text` into (metadata, body).

    Raises:
        UnterminatedMetadataBlock: start marker present but no end marker follows
        DuplicateMetadataKey: a key occurs twice within the block
        MalformedMetadataBlock: the block is not a flat mapping of scalars
    """
    lines = text.split("\n")
    if not _is_marker(lines[0], {FRONT_MATTER_START}):
        return ParsedDocument(metadata=MappingProxyType({}), body=text)

    end = _find_end_marker(lines)
    if end is None:
        raise UnterminatedMetadataBlock(storage_path)

    block = "\n".join(lines[1:end])
    body = "\n".join(lines[end + 1:])
    metadata = load_metadata_block(block, storage_path)
    return ParsedDocument(metadata=MappingProxyType(metadata), body=body)


def load_metadata_block(block: str, storage_path: Optional[str] = None) -> Dict[str, str]:
    """Parse the text between the markers into a flat str -> str dict."""
    try:
        data = yaml.load(block, Loader=make_loader(storage_path))
    except yaml.YAMLError as e:
        problem = getattr(e, "problem", None) or str(e).splitlines()[0]
        raise MalformedMetadataBlock(f"metadata block is not valid YAML ({problem})", storage_path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedMetadataBlock(
            f"metadata block must be a key/value mapping, got {type(data).__name__}",
            storage_path,
        )
    return data


def make_loader(storage_path: Optional[str] = None):
    """
    Build a YAML loader that keeps scalars as strings, rejects nested values
    and raises on repeated keys (PyYAML silently keeps the last one).

    Plain values follow YAML comment rules, as Jekyll does: `title: Lesson #1`
    reads as "Lesson". Quote the value to keep a ` #`.
    """
    class Loader(yaml.BaseLoader):
        pass

    def _construct_flat_mapping(loader: Loader, node: yaml.Node) -> Dict[str, str]:
        result: Dict[str, str] = {}
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise MalformedMetadataBlock("metadata keys must be plain strings", storage_path)
            key = loader.construct_scalar(key_node)
            if not isinstance(value_node, yaml.ScalarNode):
                raise MalformedMetadataBlock(
                    f"metadata value for {key!r} must be a single string, not a nested structure",
                    storage_path,
                )
            if key in result:
                raise DuplicateMetadataKey(key, storage_path)
            result[key] = loader.construct_scalar(value_node)
        return result

    Loader.add_constructor(yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_flat_mapping)
    return Loader


# --- Internals --- #

def _is_marker(line: str, markers) -> bool:
    # trailing whitespace and a CR from CRLF endings are tolerated, leading whitespace is not
    return line.rstrip() in markers and not line[:1].isspace()


def _find_end_marker(lines: List[str]) -> Optional[int]:
    for idx in range(1, len(lines)):
        if _is_marker(lines[idx], FRONT_MATTER_END):
            return idx
    return None
