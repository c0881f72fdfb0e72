"""Wren CLI — inspect route directories.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — declarative routes assembled into request pipelines.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser(
        "routes",
        help="List route definitions in binding order",
    )
    routes_parser.add_argument("directory", help="Directory of route definition files")
    routes_parser.add_argument(
        "--methods",
        default=None,
        help="Comma-separated verbs to accept instead of the defaults (e.g. GET,POST)",
    )
    routes_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log discovery and binding at DEBUG level",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)
