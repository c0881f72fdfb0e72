"""Preload orchestration — run a route's preloaders and merge their results.

Pipeline::

    orchestrate(["user", "flags"], request, registry)

    1. Resolve every name (UnknownPreloader before anything runs)
    2. Run them — concurrently (anyio task group) or one after another
    3. Return {"user": ..., "flags": ...}

The mode changes execution order and concurrency only, never the shape
of the result. A failing preloader fails the whole orchestration with
``PreloadFailed``; no partial mapping is ever returned.

There is no timeout: a preloader that never completes stalls the
request that awaits it.
"""

import logging
from collections.abc import Sequence
from typing import Any

import anyio

from wren._internal.types import PreloadFunc
from wren.errors import PreloadFailed
from wren.preload.registry import PreloaderRegistry, PreloadMode, coerce_mode

logger = logging.getLogger("wren.preload")


async def orchestrate(
    names: Sequence[str],
    request: Any,
    registry: PreloaderRegistry,
    mode: PreloadMode | str | None = None,
) -> dict[str, Any]:
    """Run the named preloaders against *request* and merge their results.

    *mode* overrides the registry's mode when given.
    """
    resolved = registry.resolve(names)
    if not resolved:
        return {}

    run_mode = registry.mode if mode is None else coerce_mode(mode)
    logger.debug("Preloading %s (%s)", ", ".join(n for n, _ in resolved), run_mode)

    if run_mode is PreloadMode.SEQUENTIAL:
        return await _run_sequential(resolved, request)
    return await _run_parallel(resolved, request)


async def _run_sequential(
    resolved: list[tuple[str, PreloadFunc]],
    request: Any,
) -> dict[str, Any]:
    """Await each preloader in list order; stop at the first failure."""
    results: dict[str, Any] = {}
    for name, func in resolved:
        try:
            results[name] = await func(request)
        except Exception as exc:
            raise PreloadFailed(name, exc) from exc
    return results


async def _run_parallel(
    resolved: list[tuple[str, PreloadFunc]],
    request: Any,
) -> dict[str, Any]:
    """Start every preloader at once; the first failure cancels the rest."""
    results: dict[str, Any] = {}
    failures: list[PreloadFailed] = []

    async with anyio.create_task_group() as tg:

        async def _resolve(name: str, func: PreloadFunc) -> None:
            try:
                results[name] = await func(request)
            except Exception as exc:
                if not failures:
                    failures.append(PreloadFailed(name, exc))
                tg.cancel_scope.cancel()

        for name, func in resolved:
            tg.start_soon(_resolve, name, func)

    if failures:
        raise failures[0]

    # Keep the declared order for readers of the mapping
    return {name: results[name] for name, _ in resolved}
