#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path

from jinja2 import TemplateError

from pressroom.core.app_context import AppContext
from pressroom.core.render.engine import RenderEngine
from pressroom.cli.common import read_sources, run_ingestion


def build(args, ctx: AppContext) -> int:
    result = run_ingestion(*read_sources(args, ctx))
    if result is None:
        return 1

    views, missing = result.corpus.published_views(ctx.layouts)
    for err in missing:
        print(f"  - skipped {err}")

    output_dir = Path(args.output_dir or ctx.output_dir)
    try:
        written = RenderEngine(ctx.layouts).render_site(views, output_dir)
    except (TemplateError, OSError) as e:
        print(f"Error rendering site:\n  {e}")
        return 1

    print(f"Rendered {len(views)} document(s) -> {output_dir} ({len(written)} file(s) written)")
    return 0 if result.is_clean() and not missing else 1


def register(subparser):
    parser = subparser.add_parser("build", help="Ingest the collections and render published documents.")
    parser.add_argument("--output-dir", help="Override the output directory for this run.")
    parser.set_defaults(func=build)
