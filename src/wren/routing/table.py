"""Route table assembly — validate, order, and bind definitions.

Assembly happens once at startup::

    table = assemble(definitions, app.bind, conditionals=..., preloaders=...)

1. Validate every definition (``MissingField`` / ``InvalidMethod``).
   Nothing is bound unless all of them are valid.
2. Order them by number of conditions, most first. Definitions with
   more conditions are narrower and must be offered to the dispatcher
   before broader ones that would otherwise shadow them. Ties keep
   discovery order.
3. Build one handler per definition and bind it for each declared
   method, in declaration order.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from wren._internal.types import Bind, ErrorExtractor, RouteHandler
from wren.conditions import ConditionalRegistry
from wren.errors import InvalidMethod
from wren.preload.registry import PreloaderRegistry, PreloadMode
from wren.routing.definition import ALL, HTTP_METHODS, RouteDefinition
from wren.routing.handler import build_handler
from wren.validation import default_error_extractor

_log = logging.getLogger("wren.routing")


@dataclass(frozen=True, slots=True)
class BoundRoute:
    """A definition and the handler bound for it."""

    definition: RouteDefinition
    handler: RouteHandler


RouteTable: TypeAlias = tuple[BoundRoute, ...]


def validate_definition(
    value: Any,
    methods: frozenset[str] = HTTP_METHODS,
    source: str | None = None,
) -> RouteDefinition:
    """Normalize *value* and check its methods against *methods*.

    ``ALL`` is always accepted. A ``source`` already recorded on a
    ``RouteDefinition`` wins over the one passed in.
    """
    definition = RouteDefinition.from_value(value, source=source)
    for method in definition.methods:
        if method != ALL and method not in methods:
            raise InvalidMethod(method, source=definition.source or source)
    return definition


def order_routes(definitions: Iterable[RouteDefinition]) -> list[RouteDefinition]:
    """Most conditions first; stable for equal counts."""
    return sorted(definitions, key=lambda d: len(d.conditions), reverse=True)


def _split_source(item: Any) -> tuple[Any, str | None]:
    # Loader output is (source, value); plain values carry no source
    if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
        return item[1], item[0]
    return item, None


def assemble(
    definitions: Sequence[Any],
    bind: Bind,
    *,
    conditionals: ConditionalRegistry,
    preloaders: PreloaderRegistry,
    methods: frozenset[str] = HTTP_METHODS,
    extract_errors: ErrorExtractor = default_error_extractor,
    mode: PreloadMode | str | None = None,
    logger: logging.Logger | None = None,
) -> RouteTable:
    """Validate, order and bind *definitions* to the host dispatcher.

    *definitions* may mix ``RouteDefinition`` objects, mappings, modules,
    and ``(source, value)`` pairs as produced by the loader.
    """
    log = logger or _log

    validated: list[RouteDefinition] = []
    for item in definitions:
        value, source = _split_source(item)
        validated.append(validate_definition(value, methods, source))

    table: list[BoundRoute] = []
    for definition in order_routes(validated):
        handler = build_handler(
            definition,
            conditionals=conditionals,
            preloaders=preloaders,
            extract_errors=extract_errors,
            mode=mode,
            logger=logger,
        )
        for method in definition.methods:
            log.debug("Binding %s %s", method, definition.path)
            bind(method, definition.path, handler)
        table.append(BoundRoute(definition=definition, handler=handler))

    log.info("Bound %d route(s)", len(table))
    return tuple(table)
