#!/usr/bin/env python3
"""
Purpose:
    Layout resolution. `resolve_layout` maps a layout name to whatever handle
    the rendering side registered for it; `LayoutRegistry` is the registry the
    bundled Jinja2 renderer uses, discovered from template directories.

    Resolution is exact and case-sensitive. There is no fallback chain: the
    only default layout is the one drafts receive at classification time.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, TypeVar

from pressroom.core.errors import UnknownLayout

H = TypeVar("H")


# --- Resolution --- #

def resolve_layout(name: str, registry: Mapping[str, H], storage_path: Optional[str] = None) -> H:
    """
    Return `registry[name]`.

    Raises:
        UnknownLayout: no handle registered under exactly `name`
    """
    try:
        return registry[name]
    except KeyError:
        raise UnknownLayout(name, storage_path) from None


# --- Template discovery --- #

def _layout_name_from(path: Path) -> str:
    """
    Layout name is the filename up to the first dot: 'post.html.j2' -> 'post'.
    """
    return path.name.split(".", 1)[0]


@dataclass(frozen=True)
class LayoutEntry:
    """
    Discovered layout template.
    - name: registry key derived from the filename
    - path: absolute path
    - valid: whether this entry won for its name
    - reason: diagnostic text ("kept", "duplicate-dropped", "io-error: ...")
    """
    name: str
    path: Path
    valid: bool
    reason: Optional[str] = None


class LayoutRegistry(Mapping):
    """
    Finds Jinja2 layout templates under one or more roots.

    Acts as a read-only mapping of layout name -> winning `LayoutEntry`, so it
    can be passed straight to `resolve_layout`.
    Duplicate policy: newest mtime wins; older duplicates are marked invalid.
    """

    DEFAULT_PATTERNS: Sequence[str] = ("*.html.j2", "*.xml.j2", "*.j2", "*.html")

    def __init__(self, roots: Iterable[Path], patterns: Optional[Sequence[str]] = None):
        self._roots = [Path(r) for r in roots]
        self._patterns = patterns or self.DEFAULT_PATTERNS
        self._by_name: Dict[str, LayoutEntry] = {}
        self._entries: List[LayoutEntry] = []
        self._loaded = False

    # ----- Loading ------------------------------------------------------------

    def load(self, *, clear: bool = True) -> None:
        if clear:
            self._by_name.clear()
            self._entries.clear()

        candidates: Dict[str, List[Path]] = {}
        for root in self._roots:
            if not root.exists():
                continue
            seen = set()
            for pat in self._patterns:
                for p in root.rglob(pat):
                    if p in seen or not p.is_file():
                        continue
                    seen.add(p)
                    candidates.setdefault(_layout_name_from(p), []).append(p.resolve())

        for name, paths in candidates.items():
            usable = []
            for p in paths:
                try:
                    usable.append((p.stat().st_mtime, str(p), p))
                except OSError as e:
                    self._entries.append(LayoutEntry(name=name, path=p, valid=False, reason=f"io-error: {e}"))
            if not usable:
                continue

            usable.sort(reverse=True)
            winner = LayoutEntry(name=name, path=usable[0][2], valid=True, reason="kept")
            self._by_name[name] = winner
            self._entries.append(winner)
            for _mtime, _key, loser in usable[1:]:
                self._entries.append(LayoutEntry(name=name, path=loser, valid=False, reason="duplicate-dropped"))

        self._loaded = True

    # ----- Mapping ------------------------------------------------------------

    def __getitem__(self, name: str) -> LayoutEntry:
        return self._by_name[name]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._by_name))

    def __len__(self) -> int:
        return len(self._by_name)

    # ----- Query --------------------------------------------------------------

    def resolve(self, name: str, storage_path: Optional[str] = None) -> LayoutEntry:
        return resolve_layout(name, self, storage_path)

    def names(self) -> List[str]:
        """Sorted list of valid layout names."""
        return sorted(self._by_name.keys())

    def entries(self) -> List[LayoutEntry]:
        """All scanned entries (valid + invalid)."""
        return list(self._entries)

    def valid_entries(self) -> List[LayoutEntry]:
        return [e for e in self._entries if e.valid]

    def invalid_entries(self) -> List[LayoutEntry]:
        return [e for e in self._entries if not e.valid]

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def roots(self) -> List[Path]:
        return list(self._roots)
