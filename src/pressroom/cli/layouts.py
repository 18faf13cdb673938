#!/usr/bin/env python3

from pressroom.core.app_context import AppContext


def register(subparsers):
    sp = subparsers.add_parser("layouts", help="Layout template utilities")
    sps = sp.add_subparsers(dest="layouts_cmd")

    # default when user runs: `pressroom layouts`
    def layouts_default(args, ctx: AppContext) -> int:
        sp.print_help()
        return 1
    sp.set_defaults(func=layouts_default)

    lp = sps.add_parser("list", help="List layout templates")
    lp.add_argument("--all", action="store_true", help="Include invalid layouts")
    lp.add_argument("--invalid", action="store_true", help="Show only invalid layouts")
    lp.set_defaults(func=list_layouts)


def list_layouts(args, ctx: AppContext) -> int:
    print("Searched layout_paths:", ", ".join(str(r) for r in ctx.layouts.roots) or "<none>")

    if args.invalid:
        entries = ctx.layouts.invalid_entries()
    elif args.all:
        entries = ctx.layouts.entries()
    else:
        entries = ctx.layouts.valid_entries()

    if not entries:
        print("No layouts found.")
        return 1

    print("\nLayouts Found:")
    for e in sorted(entries, key=lambda x: (not x.valid, x.name)):
        status = "✓ valid" if e.valid else f"✗ invalid ({(e.reason or 'unknown').splitlines()[0]})"
        print(f"  - {e.name:24} {status:35}  {e.path}")
    return 0
