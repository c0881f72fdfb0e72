"""Preloading — named async data fetches resolved before the responder runs.

Register preloaders by name, reference them from route definitions, and
read the results from ``request.preloaded`` in the responder.
"""

from wren.preload.orchestrator import orchestrate
from wren.preload.registry import (
    PreloaderRegistry,
    PreloadMode,
    preloader,
    preloaders,
    register_preloader,
    set_preload_mode,
)

__all__ = [
    "PreloadMode",
    "PreloaderRegistry",
    "orchestrate",
    "preloader",
    "preloaders",
    "register_preloader",
    "set_preload_mode",
]
