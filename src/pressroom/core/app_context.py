#!/usr/bin/env python3
"""
Purpose:
    Wires together the Pressroom application context: the merged
    configuration and the layout registry. A context is built per run and
    passed explicitly; there is no process-wide instance.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from pressroom.core.config import load_config
from pressroom.core.render.layouts import LayoutRegistry


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration and the layout registry."""
    config: Dict[str, Any]
    layouts: LayoutRegistry

    @property
    def posts_dir(self) -> Path:
        return Path(self.config["posts_dir"])

    @property
    def drafts_dir(self) -> Path:
        return Path(self.config["drafts_dir"])

    @property
    def output_dir(self) -> Path:
        return Path(self.config["output_dir"])


# --- Factory --- #

def build_context(
    *,
    config: Optional[Dict[str, Any]] = None,
    layout_roots: Optional[Iterable[Path]] = None,
    preload: bool = True,
) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
        layout_roots:
            Optional override for layout search paths. Defaults to `config['layout_paths']`.
        preload:
            If True, eagerly scans the layout roots; otherwise, caller may load later.

    Returns:
        AppContext: immutable bundle of config and layout registry.
    """
    cfg = config if config is not None else load_config()

    layout_paths = [Path(p) for p in (layout_roots or cfg.get("layout_paths", []))]
    layouts = LayoutRegistry(layout_paths)

    if preload:
        layouts.load(clear=True)

    return AppContext(config=cfg, layouts=layouts)
