#!/usr/bin/env python3
import os
from pathlib import Path

import pytest

from pressroom.core.errors import UnknownLayout
from pressroom.core.render.layouts import LayoutRegistry, resolve_layout


def _write(path: Path, text: str = "{{ body }}") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# --- resolve_layout --- #

def test_resolve_layout_exact_match():
    assert resolve_layout("post", {"post": 1, "page": 2}) == 1


def test_resolve_layout_is_case_sensitive():
    with pytest.raises(UnknownLayout, match="no layout named 'Post'") as info:
        resolve_layout("Post", {"post": 1}, storage_path="_posts/2018-02-09-a.md")
    assert info.value.storage_path == "_posts/2018-02-09-a.md"
    assert isinstance(info.value, LookupError)


def test_resolve_layout_has_no_default_fallback():
    with pytest.raises(UnknownLayout):
        resolve_layout("missing", {"default": 1})


# --- LayoutRegistry --- #

def test_registry_discovers_templates(tmp_path: Path):
    root = tmp_path / "_layouts"
    _write(root / "post.html.j2")
    _write(root / "default.html")
    _write(root / "nested" / "page.html.j2")
    _write(root / "notes.txt")

    reg = LayoutRegistry([root])
    reg.load()

    assert reg.loaded is True
    assert reg.names() == ["default", "page", "post"]
    assert list(reg) == ["default", "page", "post"]
    assert len(reg) == 3
    assert "post" in reg
    assert reg.resolve("post").path == (root / "post.html.j2").resolve()


def test_registry_works_with_resolve_layout(tmp_path: Path):
    _write(tmp_path / "post.html.j2")
    reg = LayoutRegistry([tmp_path])
    reg.load()
    assert resolve_layout("post", reg).name == "post"
    with pytest.raises(UnknownLayout):
        resolve_layout("page", reg)


def test_registry_handles_nonexistent_root(tmp_path: Path):
    reg = LayoutRegistry([tmp_path / "nope"])
    reg.load()
    assert reg.names() == []
    assert reg.entries() == []


def test_registry_newest_duplicate_wins(tmp_path: Path):
    older = _write(tmp_path / "a" / "post.html.j2")
    newer = _write(tmp_path / "b" / "post.html")
    os.utime(older, (1_000_000, 1_000_000))
    os.utime(newer, (2_000_000, 2_000_000))

    reg = LayoutRegistry([tmp_path])
    reg.load()

    assert reg["post"].path == newer.resolve()
    invalid = reg.invalid_entries()
    assert [(e.path, e.reason) for e in invalid] == [(older.resolve(), "duplicate-dropped")]
    assert len(reg.valid_entries()) == 1
    assert len(reg.entries()) == 2


def test_registry_reload_clears_state(tmp_path: Path):
    post = _write(tmp_path / "post.html.j2")
    reg = LayoutRegistry([tmp_path])
    reg.load()
    post.unlink()
    reg.load()
    assert reg.names() == []
