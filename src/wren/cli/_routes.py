"""``wren routes`` — list route definitions in the order they bind.

Loads every definition under a directory, validates and orders them
exactly as startup would, and prints one row per bound method.
"""

import argparse
import logging
import sys

from wren.config import PipelineConfig
from wren.errors import ConfigurationError
from wren.pipeline import Pipeline
from wren.routing.definition import HTTP_METHODS
from wren.testing.dispatcher import RecordingDispatcher


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATH, CONDITIONS, PRELOAD and SOURCE per binding."""
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    methods = HTTP_METHODS
    if args.methods:
        methods = frozenset(m.strip().upper() for m in args.methods.split(",") if m.strip())

    pipeline = Pipeline.isolated(PipelineConfig(methods=methods))
    host = RecordingDispatcher()
    try:
        pipeline.load(args.directory)
        table = pipeline.mount(host.bind)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not table:
        print("No routes found.")
        return

    # Build rows: (method, path, conditions, preload, source)
    rows: list[tuple[str, str, str, str, str]] = []
    for bound in table:
        definition = bound.definition
        for method in definition.methods:
            rows.append(
                (
                    method,
                    definition.path,
                    ", ".join(definition.conditions) or "-",
                    ", ".join(definition.preload) or "-",
                    definition.source or "-",
                )
            )

    headers = ("METHOD", "PATH", "CONDITIONS", "PRELOAD", "SOURCE")
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(headers[:-1])]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 2 * len(widths) + 6, 80))
    for row in rows:
        print(fmt.format(*row))
