"""Handler composition — one failure-safe chain per route definition.

Each built handler runs, per request::

    gate      conditionals hold?      no  -> next()          (pass through)
    validate  validator + extraction  errors -> next(ValidationFailed)
    preload   orchestrate preloaders  failure -> next(PreloadFailed)
    respond   definition.respond      failure -> next(RespondFailed)

No step runs after a failure, and nothing raised by user code escapes
into the host: every failure reaches the continuation as a single error
argument. The composer itself calls ``next`` only when the route is
gated out or something failed; on success the responder owns the
outcome. A responder that raises after calling ``next`` itself is only
logged, since the continuation has already been reached.
"""

import logging
from typing import Any

from wren._internal.invoke import invoke
from wren._internal.types import ErrorExtractor, Next, RouteHandler
from wren.conditions import ConditionalRegistry
from wren.errors import RequestError, RespondFailed, ValidationFailed
from wren.preload.orchestrator import orchestrate
from wren.preload.registry import PreloaderRegistry, PreloadMode
from wren.routing.definition import RouteDefinition
from wren.validation import default_error_extractor

_log = logging.getLogger("wren.routing")


def build_handler(
    definition: RouteDefinition,
    *,
    conditionals: ConditionalRegistry,
    preloaders: PreloaderRegistry,
    extract_errors: ErrorExtractor = default_error_extractor,
    mode: PreloadMode | str | None = None,
    logger: logging.Logger | None = None,
) -> RouteHandler:
    """Build the ``(request, response, next)`` handler for *definition*.

    The registries are looked up at request time, so conditionals and
    preloaders registered after the route is built are still found.
    *mode* pins the preload mode for this handler; ``None`` follows the
    registry.
    """
    log = logger or _log
    label = definition.label

    async def _prepare(request: Any, response: Any) -> bool:
        """Gate, validate and preload. Returns False when gated out."""
        if not conditionals.evaluate(definition.conditions, request):
            log.debug("%s: conditions %s not met", label, list(definition.conditions))
            return False

        if definition.validate is not None:
            await invoke(definition.validate, request, response)
            errors = extract_errors(request)
            if errors:
                raise ValidationFailed(errors)

        request.preloaded = await orchestrate(definition.preload, request, preloaders, mode)
        return True

    async def route_handler(request: Any, response: Any, next: Next) -> None:
        try:
            applicable = await _prepare(request, response)
        except ValidationFailed as exc:
            log.warning("%s: %s", label, exc)
            await invoke(next, exc)
            return
        except RequestError as exc:
            log.error("%s: %s", label, exc, exc_info=exc)
            await invoke(next, exc)
            return
        except Exception as exc:
            log.exception("%s: failed before responding", label)
            await invoke(next, exc)
            return

        if not applicable:
            await invoke(next)
            return

        passed_on = False

        def respond_next(*args: Any) -> Any:
            nonlocal passed_on
            passed_on = True
            return next(*args)

        try:
            await invoke(definition.respond, request, response, respond_next)
        except Exception as exc:
            if passed_on:
                # The continuation already has this request
                log.exception("%s: responder failed after calling next", label)
                return
            log.exception("%s: responder failed", label)
            await invoke(next, RespondFailed(exc))

    route_handler.__name__ = getattr(definition.respond, "__name__", "route_handler")
    route_handler.__qualname__ = route_handler.__name__
    route_handler.definition = definition  # type: ignore[attr-defined]
    return route_handler
