"""Validation result — field errors and cleaned data."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class FieldError:
    """One failed rule for one parameter.

    ``location`` says where the value came from: ``"body"``,
    ``"query"`` or ``"params"``.
    """

    param: str
    msg: str
    value: Any = None
    location: str = "body"

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.location,
            "param": self.param,
            "msg": self.msg,
            "value": self.value,
        }


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a mapping against a set of rules.

    Falsy when invalid::

        result = validate(request.body, rules)
        if not result:
            ...

    ``data`` holds the values of fields that passed every rule.
    """

    data: dict[str, Any] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid
