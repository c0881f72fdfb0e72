"""Parameter validation — composable rules, field-level errors.

Route validators use these to record errors on the request; the handler
composer then extracts them and fails the request with
``ValidationFailed``::

    from wren.validation import required, integer

    def validate(request, response):
        request.check({"id": [required, integer]}, location="params")
"""

from collections.abc import Mapping
from typing import Any

from wren.validation.result import FieldError, ValidationResult
from wren.validation.rules import (
    Rule,
    integer,
    matches,
    max_length,
    min_length,
    one_of,
    required,
)

__all__ = [
    "FieldError",
    "Rule",
    "ValidationResult",
    "default_error_extractor",
    "integer",
    "matches",
    "max_length",
    "min_length",
    "one_of",
    "required",
    "validate",
]


def validate(
    data: Mapping[str, Any],
    rules: Mapping[str, list[Rule]],
    location: str = "body",
) -> ValidationResult:
    """Check *data* against *rules*.

    Every rule of a field runs, except that a failed ``required`` stops
    that field's remaining rules.
    """
    errors: list[FieldError] = []
    cleaned: dict[str, Any] = {}

    for param, field_rules in rules.items():
        value = data.get(param)
        failed = False
        for rule in field_rules:
            message = rule(value)
            if message is None:
                continue
            failed = True
            errors.append(FieldError(param=param, msg=message, value=value, location=location))
            if rule is required:
                break
        if not failed:
            cleaned[param] = value

    return ValidationResult(data=cleaned, errors=errors)


def default_error_extractor(request: Any) -> list[Any] | None:
    """Read the field errors a validator recorded on the request.

    Returns ``None`` when nothing was recorded or the list is empty.
    """
    errors = getattr(request, "validation_errors", None)
    return list(errors) if errors else None
