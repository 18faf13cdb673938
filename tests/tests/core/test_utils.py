#!/usr/bin/env python3
import json
from pathlib import Path

import pytest

from pressroom.core.utils import load_json_file, merge_dicts


def test_merge_dicts_recurses_and_overrides():
    base = {"a": 1, "nested": {"x": 1, "y": 2}}
    override = {"b": 2, "nested": {"y": 3}}
    assert merge_dicts(base, override) == {"a": 1, "b": 2, "nested": {"x": 1, "y": 3}}
    assert base == {"a": 1, "nested": {"x": 1, "y": 2}}


def test_load_json_file_missing_returns_empty(tmp_path: Path):
    assert load_json_file(tmp_path / "nope.json") == {}


def test_load_json_file_reads_object(tmp_path: Path):
    p = tmp_path / "c.json"
    p.write_text(json.dumps({"k": "v"}), encoding="utf-8")
    assert load_json_file(p) == {"k": "v"}


def test_load_json_file_invalid_json(tmp_path: Path):
    p = tmp_path / "bad.json"
    p.write_text("{nope", encoding="utf-8")
    with pytest.raises(ValueError, match=r"Invalid JSON in .*line 1"):
        load_json_file(p)


def test_load_json_file_rejects_non_object(tmp_path: Path):
    p = tmp_path / "list.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError, match="expected a JSON object"):
        load_json_file(p)
