"""Invoke helpers — call sync or async user functions uniformly.

Predicates, validators, preloaders, responders and even the host's
continuation can be ``def`` or ``async def``. Any code that calls one of
them goes through ``invoke`` so the sync/async check lives in one place.

Usage::

    from wren._internal.invoke import invoke

    result = await invoke(func, *args, **kwargs)
"""

import inspect
from collections.abc import Callable
from typing import Any

import anyio

from wren._internal.types import PreloadFunc


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a function and await the result if it's awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def as_async(func: Callable[..., Any]) -> PreloadFunc:
    """Wrap a ``(request) -> value | awaitable`` function as a coroutine function."""
    if inspect.iscoroutinefunction(func):
        return func

    async def call(request: Any) -> Any:
        return await invoke(func, request)

    call.__name__ = getattr(func, "__name__", "preloader")
    call.__wrapped__ = func  # type: ignore[attr-defined]
    return call


def from_callback(func: Callable[..., Any]) -> PreloadFunc:
    """Wrap a ``(request, done)`` function as a coroutine function.

    ``done(error, value)`` resolves the call. The first call wins; later
    calls are ignored. A truthy ``error`` fails the call, raising it as-is
    when it is an exception.
    """

    async def call(request: Any) -> Any:
        finished = anyio.Event()
        outcome: dict[str, Any] = {}

        def done(error: Any = None, value: Any = None) -> None:
            if finished.is_set():
                return
            if error:
                outcome["error"] = (
                    error if isinstance(error, BaseException) else RuntimeError(str(error))
                )
            else:
                outcome["value"] = value
            finished.set()

        await invoke(func, request, done)
        await finished.wait()
        if "error" in outcome:
            raise outcome["error"]
        return outcome["value"]

    call.__name__ = getattr(func, "__name__", "preloader")
    call.__wrapped__ = func  # type: ignore[attr-defined]
    return call
