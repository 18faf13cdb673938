#!/usr/bin/env python3
import json
from pathlib import Path

from pressroom.core.app_context import AppContext


def register(subparsers):
    sp = subparsers.add_parser("config", help="Config utilities")
    sps = sp.add_subparsers(dest="config_cmd")

    showp = sps.add_parser("show", help="Show effective config")
    showp.set_defaults(func=show_config)

    pathsp = sps.add_parser("paths", help="Show the directories this run would read and write")
    pathsp.set_defaults(func=show_paths)


def show_config(args, ctx: AppContext) -> int:
    print(json.dumps(ctx.config, indent=2))
    return 0


def show_paths(args, ctx: AppContext) -> int:
    rows = [
        ("posts", ctx.posts_dir),
        ("drafts", ctx.drafts_dir),
        *(("layouts", root) for root in ctx.layouts.roots),
        ("output", ctx.output_dir),
    ]
    for label, path in rows:
        state = "exists" if Path(path).exists() else "missing"
        print(f"  {label:8} {str(path):60} {state}")
    return 0
