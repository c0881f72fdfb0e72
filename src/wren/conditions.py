"""Conditional registry — named boolean gates evaluated before a route runs.

A conditional is a predicate ``(request) -> bool`` registered under a
unique name. Route definitions reference conditionals by name; a route
whose conditions don't all hold is skipped for that request.

Registration happens at startup, before any traffic. Names are never
removed or replaced::

    from wren.conditions import conditional

    @conditional("isAdmin")
    def is_admin(request):
        return request.state.get("role") == "admin"

The module-level ``conditionals`` instance is process-wide. Construct a
``ConditionalRegistry()`` directly when a test or tenant needs isolation.
"""

from collections.abc import Callable, Iterable
from typing import Any

from wren._internal.types import Predicate
from wren.errors import DuplicateRegistration, InvalidArgument, UnknownConditional


class ConditionalRegistry:
    """Name → predicate table. Grows during setup, read-only afterwards."""

    __slots__ = ("_predicates",)

    def __init__(self) -> None:
        self._predicates: dict[str, Predicate] = {}

    def register(self, name: str, predicate: Predicate) -> None:
        """Register *predicate* under *name*.

        Raises ``InvalidArgument`` for an empty or non-string name or a
        non-callable predicate, ``DuplicateRegistration`` if *name* is taken.
        """
        if not isinstance(name, str) or not name:
            msg = f"Conditional name must be a non-empty string, got {name!r}"
            raise InvalidArgument(msg)
        if not callable(predicate):
            msg = f"Conditional {name!r} must be callable, got {type(predicate).__name__}"
            raise InvalidArgument(msg)
        if name in self._predicates:
            raise DuplicateRegistration("Conditional", name)
        self._predicates[name] = predicate

    def conditional(self, name: str) -> Callable[[Predicate], Predicate]:
        """Decorator form of :meth:`register`."""

        def decorator(func: Predicate) -> Predicate:
            self.register(name, func)
            return func

        return decorator

    def evaluate(self, names: Iterable[str], request: Any) -> bool:
        """Return True if every named predicate holds for *request*.

        Evaluates in order and stops at the first falsy predicate, so
        later predicates never run. An empty list always passes.
        Raises ``UnknownConditional`` when a name was never registered.
        """
        for name in names:
            predicate = self._predicates.get(name)
            if predicate is None:
                raise UnknownConditional(name)
            if not predicate(request):
                return False
        return True

    def get(self, name: str) -> Predicate | None:
        """Look up a predicate by name. Returns ``None`` if not found."""
        return self._predicates.get(name)

    def names(self) -> list[str]:
        """Registered names, in registration order."""
        return list(self._predicates)

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __len__(self) -> int:
        return len(self._predicates)


conditionals = ConditionalRegistry()
"""The process-wide conditional registry."""


def register_conditional(name: str, predicate: Predicate) -> None:
    """Register a conditional in the process-wide registry."""
    conditionals.register(name, predicate)


def conditional(name: str) -> Callable[[Predicate], Predicate]:
    """Decorator registering a conditional in the process-wide registry."""
    return conditionals.conditional(name)
