#!/usr/bin/env python3
from __future__ import annotations

from pressroom.core.app_context import AppContext
from pressroom.cli.common import read_sources, run_ingestion


def list_documents(args, ctx: AppContext) -> int:
    result = run_ingestion(*read_sources(args, ctx))
    if result is None:
        return 1

    corpus = result.corpus
    docs = sorted(corpus.drafts, key=lambda d: d.identifier.sort_key()) if args.drafts else corpus.published
    if not docs:
        print("No drafts found." if args.drafts else "No published documents found.")
        return 1

    for doc in docs:
        published_on = doc.identifier.publication_date.isoformat() if doc.identifier.publication_date else "----------"
        print(f"{published_on}  {doc.identifier.slug:32}  {doc.title or ''}")
    return 0


def register(subparser):
    parser = subparser.add_parser("list", help="List published documents, newest first.")
    parser.add_argument("--drafts", action="store_true", help="List drafts instead of published documents.")
    parser.set_defaults(func=list_documents)
