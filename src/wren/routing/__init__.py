"""Routing — declarative definitions assembled into per-route handlers.

Definitions are validated and ordered once at startup; each one becomes
a single handler bound to the host dispatcher for every declared method.
"""

from wren.routing.definition import ALL, HTTP_METHODS, RouteDefinition
from wren.routing.handler import build_handler
from wren.routing.table import (
    BoundRoute,
    RouteTable,
    assemble,
    order_routes,
    validate_definition,
)

__all__ = [
    "ALL",
    "HTTP_METHODS",
    "BoundRoute",
    "RouteDefinition",
    "RouteTable",
    "assemble",
    "build_handler",
    "order_routes",
    "validate_definition",
]
