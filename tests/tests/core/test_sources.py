#!/usr/bin/env python3
from pathlib import Path

import pytest

from pressroom.core.errors import UnreadableDocument
from pressroom.core.lifecycle import Collection
from pressroom.core.sources import find_documents, load_sources


def _write(path: Path, text: str = "x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_load_sources_reads_both_collections(tmp_path: Path):
    posts, drafts = tmp_path / "_posts", tmp_path / "_drafts"
    _write(posts / "2018-02-09-b.md", "B")
    _write(posts / "2018-02-09-a.md", "A")
    _write(drafts / "idea.markdown", "I")

    sources = load_sources(posts, drafts)

    assert [(Path(s.storage_path).name, s.collection) for s in sources] == [
        ("2018-02-09-a.md", Collection.PUBLISHED),
        ("2018-02-09-b.md", Collection.PUBLISHED),
        ("idea.markdown", Collection.DRAFT),
    ]
    assert sources[0].raw_text == "A"


def test_missing_directories_yield_nothing(tmp_path: Path):
    assert load_sources(tmp_path / "nope", tmp_path / "also-nope") == []
    assert load_sources(None, None) == []


def test_find_documents_filters_extensions_and_hidden(tmp_path: Path):
    _write(tmp_path / "2018-02-09-a.md")
    _write(tmp_path / "image.png")
    _write(tmp_path / ".hidden.md")
    _write(tmp_path / ".git" / "2018-02-09-x.md")
    _write(tmp_path / "year" / "2018-02-10-b.MD")

    found = [p.relative_to(tmp_path).as_posix() for p in find_documents(tmp_path, [".md"])]
    assert found == ["2018-02-09-a.md", "year/2018-02-10-b.MD"]


def test_custom_extensions(tmp_path: Path):
    _write(tmp_path / "2018-02-09-a.rst")
    _write(tmp_path / "2018-02-09-b.md")
    sources = load_sources(tmp_path, None, extensions=[".rst"])
    assert [Path(s.storage_path).name for s in sources] == ["2018-02-09-a.rst"]


def test_unreadable_files_are_collected_and_skipped(tmp_path: Path):
    posts = tmp_path / "_posts"
    _write(posts / "2018-02-09-a.md", "A")
    bad = posts / "2018-02-09-latin1.md"
    bad.write_bytes(b"caf\xe9\n")

    errors = []
    sources = load_sources(posts, None, errors=errors)

    assert [Path(s.storage_path).name for s in sources] == ["2018-02-09-a.md"]
    (err,) = errors
    assert isinstance(err, UnreadableDocument)
    assert err.storage_path == bad.as_posix()


def test_unreadable_file_raises_without_collector(tmp_path: Path):
    (tmp_path / "2018-02-09-bad.md").write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(UnreadableDocument, match="cannot read document"):
        load_sources(tmp_path)
