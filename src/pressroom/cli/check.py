#!/usr/bin/env python3
from __future__ import annotations

from pressroom.core.app_context import AppContext
from pressroom.core.ingest import summarize
from pressroom.cli.common import read_sources, run_ingestion


def check(args, ctx: AppContext) -> int:
    sources, unreadable = read_sources(args, ctx)
    total = len(sources) + len(unreadable)
    if not total:
        print("No documents found.")
        return 1

    result = run_ingestion(sources, unreadable)
    print(f"\nCheck complete: {summarize(result, total)}")
    if result is None or not result.is_clean():
        return 1

    if getattr(args, "layouts", False):
        _, missing = result.corpus.published_views(ctx.layouts)
        for err in missing:
            print(f"  - {err}")
        if missing:
            return 1
    return 0


def register(subparser):
    parser = subparser.add_parser("check", help="Parse and classify every document, reporting errors.")
    parser.add_argument(
        "--layouts",
        action="store_true",
        help="Also resolve every published layout against the layout registry.",
    )
    parser.set_defaults(func=check)
