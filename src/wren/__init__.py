"""Wren — declarative route definitions assembled into request pipelines.

Each route declares a path, methods, a responder and optional named
conditions, a validator and named preloaders. Wren turns them into one
handler per route (gate, validate, preload, respond) and binds it to
the host dispatcher.

Basic usage::

    from wren import Pipeline

    pipeline = Pipeline()

    @pipeline.conditional("isAdmin")
    def is_admin(request):
        return request.state.get("role") == "admin"

    @pipeline.route("/admin", conditions=["isAdmin"])
    def admin(request, response, next):
        response.send("hello admin")

    pipeline.mount(app.bind)
"""

__version__ = "0.1.0"
__all__ = [
    "ConditionalRegistry",
    "ConfigurationError",
    "Pipeline",
    "PipelineConfig",
    "PreloadMode",
    "PreloaderRegistry",
    "Request",
    "RequestError",
    "Response",
    "RouteDefinition",
    "WrenError",
    "assemble",
    "build_handler",
    "conditional",
    "load_definitions",
    "preloader",
    "set_preload_mode",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "Pipeline":
        from wren.pipeline import Pipeline

        return Pipeline

    if name == "PipelineConfig":
        from wren.config import PipelineConfig

        return PipelineConfig

    if name in ("ConditionalRegistry", "conditional"):
        from wren import conditions as _conditions

        return getattr(_conditions, name)

    if name in ("PreloadMode", "PreloaderRegistry", "preloader", "set_preload_mode"):
        from wren.preload import registry as _registry

        return getattr(_registry, name)

    if name in ("Request", "Response"):
        from wren import http as _http

        return getattr(_http, name)

    if name in ("RouteDefinition", "assemble", "build_handler"):
        from wren import routing as _routing

        return getattr(_routing, name)

    if name == "load_definitions":
        from wren.loader import load_definitions

        return load_definitions

    if name in ("ConfigurationError", "RequestError", "WrenError"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
