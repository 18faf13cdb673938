#!/usr/bin/env python3

import argparse
import logging
import sys

from pressroom.core.app_context import build_context
from pressroom.core.config import load_config
from pressroom.cli import build, check, config, layouts, listing


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pressroom", description="Pressroom essay publishing pipeline")
    parser.add_argument("--posts-dir", help="Published collection directory for this run.")
    parser.add_argument("--drafts-dir", help="Draft collection directory for this run.")
    parser.add_argument(
        "--layout-path",
        action="append",
        default=None,
        help="Override layout roots just for this run (can be used multiple times).",
    )
    parser.add_argument("--log-level", help="Override the configured log level.")
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands (they accept args and ctx)
    check.register(subparsers)
    listing.register(subparsers)
    build.register(subparsers)
    layouts.register(subparsers)
    config.register(subparsers)
    return parser


def main(argv=None) -> int:
    parser = make_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    cfg = load_config()
    level = args.log_level or cfg.get("logging", {}).get("level", "INFO")
    logging.basicConfig(level=str(level).upper(), format="%(levelname)s %(name)s: %(message)s")

    ctx = build_context(config=cfg, layout_roots=args.layout_path)  # built once per run
    return args.func(args, ctx)


if __name__ == "__main__":
    sys.exit(main())
