"""Recording dispatcher — a stand-in host for exercising bound handlers.

Records every ``bind()`` call in order and replays requests through the
handlers bound for exactly the request path, the way an express-style
host walks its handler stack. No path patterns, no parameters.
"""

from dataclasses import dataclass, field
from typing import Any

from wren._internal.types import RouteHandler
from wren.http.request import Request
from wren.http.response import Response
from wren.routing.definition import ALL


@dataclass(frozen=True, slots=True)
class Binding:
    """One ``bind(method, path, handler)`` call."""

    method: str
    path: str
    handler: RouteHandler


@dataclass(slots=True)
class DispatchResult:
    """What happened to a dispatched request.

    ``handled`` is True when a handler finished without passing the
    request on. ``error`` is the error a handler handed to ``next``.
    ``tried`` counts the handlers that ran.
    """

    response: Response
    handled: bool = False
    error: BaseException | None = None
    tried: int = 0
    passes: list[str] = field(default_factory=list)


class RecordingDispatcher:
    """Host dispatcher double with ``bind`` and ``dispatch``.

    Usage::

        host = RecordingDispatcher()
        pipeline.mount(host.bind)
        result = await host.dispatch(Request("GET", "/admin"))
        assert result.handled
    """

    __test__ = False

    __slots__ = ("bindings",)

    def __init__(self) -> None:
        self.bindings: list[Binding] = []

    def bind(self, method: str, path: str, handler: RouteHandler) -> None:
        self.bindings.append(Binding(method=method, path=path, handler=handler))

    def handlers_for(self, method: str, path: str) -> list[Binding]:
        """Bindings that would see a request, in binding order."""
        method = method.upper()
        return [
            b for b in self.bindings if b.path == path and b.method in (method, ALL)
        ]

    async def dispatch(
        self,
        request: Request,
        response: Response | None = None,
    ) -> DispatchResult:
        """Run *request* through the matching handlers until one handles it."""
        result = DispatchResult(response=response or Response())

        for binding in self.handlers_for(request.method, request.path):
            calls: list[tuple[Any, ...]] = []

            def next(*args: Any, _calls: list[tuple[Any, ...]] = calls) -> None:
                _calls.append(args)

            result.tried += 1
            await binding.handler(request, result.response, next)

            if not calls:
                result.handled = True
                return result
            args = calls[0]
            if args and args[0] is not None:
                result.error = args[0]
                return result
            result.passes.append(getattr(binding.handler, "__name__", repr(binding.handler)))

        return result
