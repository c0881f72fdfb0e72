"""RouteDefinition — the frozen, normalized form of a declarative route.

Route files declare plain values::

    route = {
        "path": "/admin/users",
        "method": ["GET", "HEAD"],
        "conditions": ["isAdmin"],
        "preload": ["users"],
        "validate": validate,
        "respond": respond,
    }

``RouteDefinition.from_value`` accepts such a mapping, any object (a
module, a class) exposing the same attributes, or an existing
``RouteDefinition``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from wren._internal.types import Responder, RouteValidator
from wren.errors import InvalidArgument, InvalidMethod, MissingField

HTTP_METHODS: frozenset[str] = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"}
)

# Wildcard: the host binds the handler for every method
ALL = "ALL"

_MISSING = object()


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A validated route definition.

    ``methods`` keeps the declared order; ``conditions`` and ``preload``
    hold registry names. ``source`` names the file the definition came
    from, when known.
    """

    path: str
    methods: tuple[str, ...]
    respond: Responder
    validate: RouteValidator | None = None
    conditions: tuple[str, ...] = ()
    preload: tuple[str, ...] = ()
    name: str | None = None
    source: str | None = None

    @classmethod
    def from_value(cls, value: Any, source: str | None = None) -> RouteDefinition:
        """Normalize a mapping or attribute-bearing object.

        Raises ``MissingField`` for the first absent required field, in the
        order path, method, respond. Raises ``InvalidArgument`` for a
        non-callable ``respond`` or ``validate`` and for condition or preload
        names that are not non-empty strings.
        """
        if isinstance(value, RouteDefinition):
            return value

        def read(key: str, default: Any = None) -> Any:
            if isinstance(value, Mapping):
                return value.get(key, default)
            return getattr(value, key, default)

        path = read("path")
        if not path:
            raise MissingField("path", source=source)
        method = read("method", _MISSING)
        if method is _MISSING:
            method = read("methods")
        if not method:
            raise MissingField("method", source=source)
        respond = read("respond")
        if not respond:
            raise MissingField("respond", source=source)
        if not callable(respond):
            msg = f"Route respond must be callable, got {type(respond).__name__}"
            raise InvalidArgument(msg, source=source)
        validate = read("validate")
        if validate is not None and not callable(validate):
            msg = f"Route validate must be callable, got {type(validate).__name__}"
            raise InvalidArgument(msg, source=source)

        return cls(
            path=path,
            methods=_normalize_methods(method, source),
            respond=respond,
            validate=validate,
            conditions=_normalize_names(read("conditions"), "conditions", source),
            preload=_normalize_names(read("preload"), "preload", source),
            name=read("name"),
            source=source,
        )

    @property
    def label(self) -> str:
        """Human-readable identifier for logs."""
        if self.name:
            return self.name
        return f"{'|'.join(self.methods)} {self.path}"


def _normalize_methods(method: Any, source: str | None) -> tuple[str, ...]:
    if isinstance(method, str):
        raw = [method]
    elif isinstance(method, (list, tuple, set, frozenset)):
        raw = list(method)
    else:
        raise InvalidMethod(method, source=source)
    methods: list[str] = []
    for item in raw:
        if not isinstance(item, str) or not item:
            raise InvalidMethod(item, source=source)
        upper = item.upper()
        if upper not in methods:
            methods.append(upper)
    return tuple(methods)


def _normalize_names(value: Any, field: str, source: str | None) -> tuple[str, ...]:
    # A bare string is one name, not a sequence of characters
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple)):
        msg = f"Route {field} must be a list of names, got {type(value).__name__}"
        raise InvalidArgument(msg, source=source)
    for name in value:
        if not isinstance(name, str) or not name:
            msg = f"Route {field} entries must be non-empty strings, got {name!r}"
            raise InvalidArgument(msg, source=source)
    return tuple(value)
