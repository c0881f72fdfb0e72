"""Request carrier for hosts without their own request object.

Any object works as a request context as long as it accepts the
``preloaded`` attribute and, with the default error extractor, exposes
``validation_errors``. This class is the reference shape used by the CLI,
the testing dispatcher and the test suite.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from wren.validation import FieldError, Rule, validate


@dataclass(slots=True)
class Request:
    """A mutable per-request context.

    ``preloaded`` is replaced with the preload results before the
    responder runs. ``state`` is free-form storage for middleware and
    predicates.
    """

    method: str = "GET"
    path: str = "/"
    params: dict[str, Any] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    state: dict[str, Any] = field(default_factory=dict)
    preloaded: dict[str, Any] = field(default_factory=dict)
    validation_errors: list[FieldError] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.headers = {k.lower(): v for k, v in self.headers.items()}

    def _source(self, location: str) -> Mapping[str, Any]:
        if location == "body":
            return self.body
        if location == "query":
            return self.query
        if location == "params":
            return self.params
        msg = f"Unknown parameter location {location!r}"
        raise ValueError(msg)

    def check(self, rules: Mapping[str, list[Rule]], location: str = "body") -> bool:
        """Validate one location against *rules* and record any errors.

        Returns True when this check added no errors.
        """
        result = validate(self._source(location), rules, location=location)
        self.validation_errors.extend(result.errors)
        return result.is_valid

    def param(self, name: str, default: Any = None) -> Any:
        """Look a parameter up in params, then body, then query."""
        for source in (self.params, self.body, self.query):
            if name in source:
                return source[name]
        return default

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name.lower(), default)
