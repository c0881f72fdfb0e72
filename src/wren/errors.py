"""Wren exception hierarchy.

Shared across registries, the handler composer, and the route table so
every module raises and catches the same types.

Two families:

- ``ConfigurationError`` — fatal, raised synchronously while registering
  conditionals/preloaders or assembling the route table. Aborts startup.
- ``RequestError`` — produced while handling a request. Never raised into
  the host; always delivered through the continuation callback.
"""

from typing import Any


class WrenError(Exception):
    """Base for all wren-specific errors."""


# -- Startup ------------------------------------------------------------------


class ConfigurationError(WrenError):
    """Raised when registration or route assembly is invalid.

    ``source`` optionally names the definition file or module that caused
    the failure, for traceability at startup.
    """

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.message} (in {self.source})"
        return self.message


class InvalidArgument(ConfigurationError):
    """A registration call received a bad name, function, or mode."""


class DuplicateRegistration(ConfigurationError):
    """A conditional or preloader name is already registered."""

    def __init__(self, kind: str, name: str, *, source: str | None = None) -> None:
        super().__init__(f"{kind} {name!r} is already registered", source=source)
        self.kind = kind
        self.name = name


class MissingField(ConfigurationError):
    """A route definition lacks a required field."""

    def __init__(self, field: str, *, source: str | None = None) -> None:
        super().__init__(f"Route definition is missing {field!r}", source=source)
        self.field = field


class InvalidMethod(ConfigurationError):
    """A route definition declares a method outside the recognized verbs."""

    def __init__(self, method: Any, *, source: str | None = None) -> None:
        super().__init__(f"Invalid method {method!r}", source=source)
        self.method = method


# -- Request time -------------------------------------------------------------


class RequestError(WrenError):
    """An error produced while handling a request.

    ``code`` tags the failure kind; ``status`` is the HTTP status a host
    error pipeline would typically answer with.
    """

    code: str = "RequestError"
    status: int = 500

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready payload for host error handlers."""
        return {"code": self.code, "message": str(self)}


class UnknownConditional(RequestError):  # noqa: N818
    """A route references a conditional that was never registered."""

    code = "UnknownConditional"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown conditional {name!r}")
        self.name = name


class UnknownPreloader(RequestError):  # noqa: N818
    """A route references a preloader that was never registered."""

    code = "UnknownPreloader"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown preloader {name!r}")
        self.name = name


class ValidationFailed(RequestError):  # noqa: N818
    """The route validator produced field errors.

    ``errors`` is whatever the validation-error extractor returned,
    typically a list of ``FieldError``.
    """

    code = "InvalidParameters"
    status = 400

    def __init__(self, errors: list[Any]) -> None:
        super().__init__(f"Invalid parameters ({len(errors)} error(s))")
        self.errors = list(errors)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["errors"] = [
            error.to_dict() if hasattr(error, "to_dict") else error for error in self.errors
        ]
        return payload


class PreloadFailed(RequestError):  # noqa: N818
    """A preloader raised. Wraps the first failure."""

    code = "PreloadFailed"

    def __init__(self, name: str, error: BaseException) -> None:
        super().__init__(f"Preloader {name!r} failed: {error}")
        self.name = name
        self.error = error
        self.__cause__ = error


class RespondFailed(RequestError):  # noqa: N818
    """The responder raised or its awaitable was rejected."""

    code = "RespondFailed"

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"Responder failed: {error}")
        self.error = error
        self.__cause__ = error
