#!/usr/bin/env python3
"""
Purpose:
    Minimal Jinja2 renderer for a built corpus. Each published view is
    rendered through its layout template to
    `<output>/<YYYY>/<MM>/<DD>/<slug>.html`; when an `index` layout exists the
    listing is rendered to `<output>/index.html`.

Template context:
    doc       the PublishedView being rendered
    page      its identifier
    metadata  its front matter
    body      its raw body text
    site      every published view, in listing order
    previous  newer neighbour (or None)
    next      older neighbour (or None)
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PrefixLoader, StrictUndefined, select_autoescape

from pressroom.core.constants import DEFAULT_TEXT_ENCODING
from pressroom.core.corpus import PublishedView
from pressroom.core.render.layouts import LayoutEntry, LayoutRegistry

logger = logging.getLogger(__name__)

INDEX_LAYOUT = "index"


def _build_env(
    templates_roots: Iterable[Path],
    extra_filters: Optional[Dict[str, Any]] = None
) -> Environment:
    roots = [str(Path(p).resolve()) for p in templates_roots]
    # "@<n>/name" pins a template to root n; bare names (extends, include) search roots in order
    loader = ChoiceLoader([
        PrefixLoader({_root_prefix(i): FileSystemLoader(r) for i, r in enumerate(roots)}),
        FileSystemLoader(roots),
    ])
    env = Environment(
        loader=loader,
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "html.j2", "xml.j2")),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    if extra_filters:
        env.filters.update(extra_filters)
    return env


def _root_prefix(index: int) -> str:
    return f"@{index}"


def output_path_for(view: PublishedView, output_dir: Path) -> Path:
    published_on = view.identifier.publication_date
    if published_on is None:
        return output_dir / f"{view.identifier.slug}.html"
    return output_dir / f"{published_on:%Y}" / f"{published_on:%m}" / f"{published_on:%d}" / f"{view.identifier.slug}.html"


class RenderEngine:
    """
    Holds a Jinja Environment over the layout registry's roots.
    Layout handles are `LayoutEntry` records from that registry.
    """

    def __init__(self, layouts: LayoutRegistry, filters: Optional[Dict[str, Any]] = None):
        self.layouts = layouts
        self._roots = [r.resolve() for r in layouts.roots]
        self.env = _build_env(self._roots, filters)

    def render_html(self, entry: LayoutEntry, context: Dict[str, Any]) -> str:
        template = self.env.get_template(self._template_name(entry))
        return template.render(**context)

    def render_site(self, views: Sequence[PublishedView], output_dir: Path) -> List[Path]:
        """Render every view plus the optional index page. Returns written paths."""
        output_dir = Path(output_dir)
        written: List[Path] = []
        for pos, view in enumerate(views):
            context = {
                "doc": view,
                "page": view.identifier,
                "metadata": view.metadata,
                "body": view.body,
                "site": views,
                "previous": views[pos - 1] if pos > 0 else None,
                "next": views[pos + 1] if pos + 1 < len(views) else None,
            }
            html = self.render_html(view.layout_handle, context)
            target = output_path_for(view, output_dir)
            _write(target, html)
            logger.debug("Rendered %s -> %s", view.identifier, target)
            written.append(target)

        index = self.layouts.get(INDEX_LAYOUT)
        if index is not None:
            target = output_dir / "index.html"
            _write(target, self.render_html(index, {"site": views}))
            written.append(target)
        return written

    def _template_name(self, entry: LayoutEntry) -> str:
        """Loader name addressing exactly the file the registry selected."""
        path = entry.path.resolve()
        for i, root in enumerate(self._roots):
            if path.is_relative_to(root):
                return f"{_root_prefix(i)}/{path.relative_to(root).as_posix()}"
        raise FileNotFoundError(f"Layout {entry.name!r} at {str(path)!r} is outside the template roots")


def _write(target: Path, text: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding=DEFAULT_TEXT_ENCODING)
