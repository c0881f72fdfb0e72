"""Shared type aliases used across wren modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# Named boolean gate: receives the request context
Predicate: TypeAlias = Callable[[Any], Any]

# Normalized preloader: request context in, awaited value out
PreloadFunc: TypeAlias = Callable[[Any], Awaitable[Any]]

# Continuation: no argument means "pass", one argument means "failed"
Next: TypeAlias = Callable[..., Any]

# Route responder: (request, response, next), sync or async
Responder: TypeAlias = Callable[[Any, Any, Next], Any]

# Route validator: (request, response), sync or async
RouteValidator: TypeAlias = Callable[[Any, Any], Any]

# Validation-error extraction capability supplied by the host
ErrorExtractor: TypeAlias = Callable[[Any], list[Any] | None]

# Built per-route handler
RouteHandler: TypeAlias = Callable[[Any, Any, Next], Awaitable[None]]

# Host dispatcher binding capability: bind(method, path, handler)
Bind: TypeAlias = Callable[[str, str, RouteHandler], Any]
