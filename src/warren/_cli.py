"""Warren CLI — warren routes / warren build / warren watch.

Entry point for the ``warren`` command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys

from warren._errors import WarrenError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the warren CLI."""
    parser = argparse.ArgumentParser(
        prog="warren",
        description="Generate a route tree from a views directory.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log per-page diagnostics",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # warren routes
    routes_parser = subparsers.add_parser("routes", help="Print the route tree")
    _add_common_args(routes_parser)

    # warren build
    build_parser = subparsers.add_parser("build", help="Write the route manifest")
    _add_common_args(build_parser)
    build_parser.add_argument("--output", default=None, help="Manifest path (default: routes.json)")

    # warren watch
    watch_parser = subparsers.add_parser(
        "watch",
        help="Rewrite the route manifest whenever views or layouts change",
    )
    _add_common_args(watch_parser)
    watch_parser.add_argument("--output", default=None, help="Manifest path (default: routes.json)")

    return parser


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    parser.add_argument("--views-dir", default=None, help="Views directory (default: views)")
    parser.add_argument(
        "--layouts-dir", default=None, help="Layouts directory (default: layouts)",
    )
    parser.add_argument(
        "--strict-layouts",
        action="store_true",
        default=None,
        help="Fail when sibling pages disagree on their parent's layout",
    )


def _get_version() -> str:
    """Get the package version."""
    from warren import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="  %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    from warren.app import build, routes, watch

    overrides: dict[str, object] = {
        "views_dir": args.views_dir,
        "layouts_dir": args.layouts_dir,
        "strict_layouts": args.strict_layouts,
    }

    try:
        if args.command == "routes":
            routes(args.root, **overrides)
        elif args.command == "build":
            build(args.root, output=args.output, **overrides)
        elif args.command == "watch":
            watch(args.root, output=args.output, **overrides)
    except WarrenError as exc:
        print(f"warren: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
