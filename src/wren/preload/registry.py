"""Preloader registry — named async data fetches and the global preload mode.

Mirrors ``ConditionalRegistry``: names are unique, registered once at
startup, never removed. Whatever shape the registered function has, the
registry stores it as ``async (request) -> value``:

    @preloader("user")
    async def load_user(request):
        return await db.fetch_user(request.params["id"])

    @preloader("flags")
    def load_flags(request):            # plain function, value returned
        return FLAGS

    @preloader("legacy", callback=True)
    def load_legacy(request, done):     # done(error, value), called once
        client.get(request.path, done)

The registry also owns the orchestration mode. It is process-wide for the
registry, not per route, and is expected to be set once at startup.
"""

from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import Any

from wren._internal.invoke import as_async, from_callback
from wren._internal.types import PreloadFunc
from wren.errors import DuplicateRegistration, InvalidArgument, UnknownPreloader


class PreloadMode(StrEnum):
    """How a route's preloaders run."""

    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"


def coerce_mode(mode: PreloadMode | str) -> PreloadMode:
    """Accept a ``PreloadMode`` or its string value (case-insensitive)."""
    if isinstance(mode, PreloadMode):
        return mode
    if isinstance(mode, str):
        try:
            return PreloadMode(mode.lower())
        except ValueError:
            pass
    choices = ", ".join(m.value for m in PreloadMode)
    msg = f"Preload mode must be one of: {choices}; got {mode!r}"
    raise InvalidArgument(msg)


class PreloaderRegistry:
    """Name → normalized preloader table, plus the orchestration mode."""

    __slots__ = ("_mode", "_preloaders")

    def __init__(self, mode: PreloadMode | str = PreloadMode.PARALLEL) -> None:
        self._preloaders: dict[str, PreloadFunc] = {}
        self._mode = coerce_mode(mode)

    @property
    def mode(self) -> PreloadMode:
        return self._mode

    def set_mode(self, mode: PreloadMode | str) -> None:
        """Switch between parallel and sequential orchestration."""
        self._mode = coerce_mode(mode)

    def register(
        self,
        name: str,
        func: Callable[..., Any],
        *,
        callback: bool = False,
    ) -> None:
        """Register *func* under *name*.

        With ``callback=True`` the function is called as
        ``func(request, done)`` and resolves when ``done(error, value)``
        is invoked.
        """
        if not isinstance(name, str) or not name:
            msg = f"Preloader name must be a non-empty string, got {name!r}"
            raise InvalidArgument(msg)
        if not callable(func):
            msg = f"Preloader {name!r} must be callable, got {type(func).__name__}"
            raise InvalidArgument(msg)
        if name in self._preloaders:
            raise DuplicateRegistration("Preloader", name)
        self._preloaders[name] = from_callback(func) if callback else as_async(func)

    def preloader(
        self,
        name: str,
        *,
        callback: bool = False,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of :meth:`register`. Returns the original function."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register(name, func, callback=callback)
            return func

        return decorator

    def resolve(self, names: Iterable[str]) -> list[tuple[str, PreloadFunc]]:
        """Look up every name before anything runs.

        Raises ``UnknownPreloader`` for the first unregistered name.
        """
        resolved: list[tuple[str, PreloadFunc]] = []
        for name in names:
            func = self._preloaders.get(name)
            if func is None:
                raise UnknownPreloader(name)
            resolved.append((name, func))
        return resolved

    def get(self, name: str) -> PreloadFunc | None:
        """Look up a normalized preloader. Returns ``None`` if not found."""
        return self._preloaders.get(name)

    def names(self) -> list[str]:
        """Registered names, in registration order."""
        return list(self._preloaders)

    def __contains__(self, name: object) -> bool:
        return name in self._preloaders

    def __len__(self) -> int:
        return len(self._preloaders)


preloaders = PreloaderRegistry()
"""The process-wide preloader registry."""


def register_preloader(name: str, func: Callable[..., Any], *, callback: bool = False) -> None:
    """Register a preloader in the process-wide registry."""
    preloaders.register(name, func, callback=callback)


def preloader(
    name: str,
    *,
    callback: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator registering a preloader in the process-wide registry."""
    return preloaders.preloader(name, callback=callback)


def set_preload_mode(mode: PreloadMode | str) -> None:
    """Set the process-wide preload mode."""
    preloaders.set_mode(mode)
