"""Built-in parameter rules.

A rule is any callable ``(value) -> message | None``. ``value`` is
whatever the request carried for the parameter, ``None`` when absent.
Parameterized rules are factories returning a rule.
"""

import re
from collections.abc import Callable
from typing import Any, TypeAlias

Rule: TypeAlias = Callable[[Any], str | None]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def required(value: Any) -> str | None:
    """Parameter must be present and non-blank."""
    if not _text(value).strip():
        return "is required"
    return None


def max_length(n: int) -> Rule:
    def check(value: Any) -> str | None:
        if len(_text(value)) > n:
            return f"must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Rule:
    def check(value: Any) -> str | None:
        if len(_text(value)) < n:
            return f"must be at least {n} characters"
        return None

    return check


def integer(value: Any) -> str | None:
    """Parameter must parse as a base-10 integer."""
    if isinstance(value, bool):
        return "must be an integer"
    if isinstance(value, int):
        return None
    try:
        int(_text(value))
    except ValueError:
        return "must be an integer"
    return None


def one_of(*choices: str) -> Rule:
    allowed = frozenset(choices)

    def check(value: Any) -> str | None:
        if _text(value) not in allowed:
            return f"must be one of: {', '.join(sorted(allowed))}"
        return None

    return check


def matches(pattern: str, message: str | None = None) -> Rule:
    compiled = re.compile(pattern)

    def check(value: Any) -> str | None:
        if not compiled.fullmatch(_text(value)):
            return message or f"must match {pattern}"
        return None

    return check
