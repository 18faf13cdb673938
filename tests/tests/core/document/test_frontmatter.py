#!/usr/bin/env python3
import pytest

from pressroom.core.document.frontmatter import parse_document
from pressroom.core.errors import (
    DuplicateMetadataKey,
    MalformedMetadataBlock,
    ParseError,
    UnterminatedMetadataBlock,
)


# --- Happy paths --- #

def test_parses_metadata_and_body():
    text = "---\nlayout: post\ntitle: On Slowness\n---\nFirst paragraph.\n\nSecond.\n"
    parsed = parse_document(text)
    assert dict(parsed.metadata) == {"layout": "post", "title": "On Slowness"}
    assert parsed.body == "First paragraph.\n\nSecond.\n"


def test_text_without_marker_is_all_body():
    text = "Just an essay.\n---\nlayout: post\n---\n"
    parsed = parse_document(text)
    assert dict(parsed.metadata) == {}
    assert parsed.body == text


def test_leading_whitespace_before_marker_is_not_front_matter():
    text = "  ---\nlayout: post\n---\nbody"
    parsed = parse_document(text)
    assert dict(parsed.metadata) == {}
    assert parsed.body == text


def test_leading_blank_line_is_not_front_matter():
    text = "\n---\nlayout: post\n---\nbody"
    assert dict(parse_document(text).metadata) == {}


def test_empty_text_is_empty_body():
    parsed = parse_document("")
    assert dict(parsed.metadata) == {}
    assert parsed.body == ""


def test_empty_block_yields_empty_mapping():
    parsed = parse_document("---\n---\nbody\n")
    assert dict(parsed.metadata) == {}
    assert parsed.body == "body\n"


def test_values_stay_strings():
    parsed = parse_document("---\nlayout: post\nyear: 2018\ndraft: true\nempty:\n---\n")
    assert dict(parsed.metadata) == {"layout": "post", "year": "2018", "draft": "true", "empty": ""}


def test_quoted_value_with_colon():
    parsed = parse_document('---\ntitle: "Notes: a retrospective"\n---\n')
    assert parsed.metadata["title"] == "Notes: a retrospective"


def test_dots_close_block_and_crlf_is_accepted():
    parsed = parse_document("---\r\nlayout: post\r\n...\r\nBody\r\n")
    assert dict(parsed.metadata) == {"layout": "post"}
    assert parsed.body == "Body\r\n"


def test_metadata_is_read_only():
    parsed = parse_document("---\nlayout: post\n---\n")
    with pytest.raises(TypeError):
        parsed.metadata["layout"] = "page"  # type: ignore[index]


# --- Error paths --- #

@pytest.mark.parametrize(
    "body",
    ["", "no closing marker\n", "lots\nof\nlines\n" * 20, "----\n", "  ---\n"],
)
def test_unterminated_block_always_fails(body):
    with pytest.raises(UnterminatedMetadataBlock):
        parse_document("---\nlayout: post\n" + body)


def test_marker_only_is_unterminated():
    with pytest.raises(UnterminatedMetadataBlock):
        parse_document("---")


def test_duplicate_key_fails_and_names_key_and_path():
    with pytest.raises(DuplicateMetadataKey, match=r"_posts/x\.md: metadata key 'layout'") as info:
        parse_document("---\nlayout: post\ntitle: t\nlayout: page\n---\n", storage_path="_posts/x.md")
    assert info.value.key == "layout"
    assert info.value.storage_path == "_posts/x.md"


@pytest.mark.parametrize(
    "block",
    [
        "- a\n- b\n",                      # list, not mapping
        "just a sentence\n",               # bare scalar
        "tags:\n  - a\n  - b\n",           # sequence value
        "author:\n  name: x\n",            # nested mapping
        "title: [unclosed\n",              # invalid YAML
    ],
)
def test_malformed_blocks_fail(block):
    with pytest.raises(MalformedMetadataBlock):
        parse_document("---\n" + block + "---\nbody\n", storage_path="p.md")


def test_parse_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_document("---\nlayout: post\n")
    assert issubclass(DuplicateMetadataKey, ParseError)


def test_hash_after_space_starts_a_comment_unless_quoted():
    parsed = parse_document('---\ntitle: Lesson #1\nsubtitle: "Lesson #2"\ntag: C#\n---\n')
    assert parsed.metadata["title"] == "Lesson"
    assert parsed.metadata["subtitle"] == "Lesson #2"
    assert parsed.metadata["tag"] == "C#"
