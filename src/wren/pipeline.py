"""Pipeline — registries, definitions and assembly behind one object.

Mutable during setup (conditionals, preloaders, routes).
Frozen once ``mount()`` binds the route table to the host.

Thread safety:
    Setup is single-threaded (decorators at import time). ``mount()``
    uses a Lock so concurrent callers bind exactly once.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from wren._internal.types import Bind, ErrorExtractor, Predicate, Responder, RouteValidator
from wren.conditions import ConditionalRegistry
from wren.conditions import conditionals as default_conditionals
from wren.config import PipelineConfig
from wren.errors import ConfigurationError
from wren.loader import load_definitions
from wren.preload.registry import PreloaderRegistry
from wren.preload.registry import preloaders as default_preloaders
from wren.routing.table import RouteTable, assemble
from wren.validation import default_error_extractor


class Pipeline:
    """Declarative routes assembled into host-bound handlers.

    Usage::

        pipeline = Pipeline()

        @pipeline.conditional("isAdmin")
        def is_admin(request):
            return request.state.get("role") == "admin"

        @pipeline.preloader("users")
        async def users(request):
            return await db.list_users()

        @pipeline.route("/admin/users", conditions=["isAdmin"], preload=["users"])
        async def list_users(request, response, next):
            response.json(request.preloaded["users"])

        table = pipeline.mount(host.bind)

    Without explicit registries the pipeline shares the process-wide
    ``conditionals`` and ``preloaders``. ``Pipeline.isolated()`` gives it
    fresh ones.
    """

    __slots__ = (
        "_definitions",
        "_mount_lock",
        "_table",
        "conditionals",
        "config",
        "extract_errors",
        "logger",
        "preloaders",
    )

    def __init__(
        self,
        config: PipelineConfig | None = None,
        *,
        conditionals: ConditionalRegistry | None = None,
        preloaders: PreloaderRegistry | None = None,
        extract_errors: ErrorExtractor | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config: PipelineConfig = config or PipelineConfig()
        self.conditionals: ConditionalRegistry = (
            default_conditionals if conditionals is None else conditionals
        )
        self.preloaders: PreloaderRegistry = (
            default_preloaders if preloaders is None else preloaders
        )
        if self.config.preload_mode is not None:
            self.preloaders.set_mode(self.config.preload_mode)
        self.extract_errors: ErrorExtractor = extract_errors or default_error_extractor
        self.logger: logging.Logger = logger or logging.getLogger(self.config.logger_name)
        self._definitions: list[tuple[str | None, Any]] = []
        self._table: RouteTable | None = None
        self._mount_lock = threading.Lock()

    @classmethod
    def isolated(cls, config: PipelineConfig | None = None, **kwargs: Any) -> Pipeline:
        """A pipeline with its own empty registries."""
        return cls(
            config,
            conditionals=ConditionalRegistry(),
            preloaders=PreloaderRegistry(),
            **kwargs,
        )

    # -- Registration --

    def conditional(self, name: str) -> Callable[[Predicate], Predicate]:
        """Register a named conditional."""
        self._check_not_mounted()
        return self.conditionals.conditional(name)

    def preloader(
        self,
        name: str,
        *,
        callback: bool = False,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a named preloader."""
        self._check_not_mounted()
        return self.preloaders.preloader(name, callback=callback)

    def route(
        self,
        path: str,
        method: str | list[str] = "GET",
        *,
        conditions: list[str] | tuple[str, ...] = (),
        preload: list[str] | tuple[str, ...] = (),
        validate: RouteValidator | None = None,
        name: str | None = None,
    ) -> Callable[[Responder], Responder]:
        """Register the decorated function as a route responder."""

        def decorator(func: Responder) -> Responder:
            self.add(
                {
                    "path": path,
                    "method": method,
                    "respond": func,
                    "validate": validate,
                    "conditions": conditions,
                    "preload": preload,
                    "name": name,
                },
                source=f"{func.__module__}.{func.__qualname__}",
            )
            return func

        return decorator

    def add(self, definition: Any, source: str | None = None) -> None:
        """Queue a definition (mapping, object or ``RouteDefinition``)."""
        self._check_not_mounted()
        self._definitions.append((source, definition))

    def load(self, directory: str | Path) -> int:
        """Queue every definition found under *directory*. Returns the count."""
        self._check_not_mounted()
        found = load_definitions(directory)
        self._definitions.extend(found)
        return len(found)

    # -- Assembly --

    def mount(self, bind: Bind) -> RouteTable:
        """Validate, order and bind all queued definitions. Runs once."""
        if self._table is not None:
            return self._table
        with self._mount_lock:
            if self._table is not None:
                return self._table
            items = [
                (source, value) if source is not None else value
                for source, value in self._definitions
            ]
            self._table = assemble(
                items,
                bind,
                conditionals=self.conditionals,
                preloaders=self.preloaders,
                methods=self.config.methods,
                extract_errors=self.extract_errors,
                logger=self.logger,
            )
            if self.config.debug:
                self._log_table(self._table)
        return self._table

    @property
    def table(self) -> RouteTable:
        """The bound route table. Raises before ``mount()``."""
        if self._table is None:
            msg = "Pipeline has not been mounted yet."
            raise ConfigurationError(msg)
        return self._table

    @property
    def mounted(self) -> bool:
        return self._table is not None

    def _log_table(self, table: RouteTable) -> None:
        for bound in table:
            definition = bound.definition
            self.logger.info(
                "%s %s conditions=%s preload=%s (%s)",
                "|".join(definition.methods),
                definition.path,
                list(definition.conditions),
                list(definition.preload),
                definition.source or "-",
            )

    def _check_not_mounted(self) -> None:
        if self._table is not None:
            msg = "Cannot register after the pipeline has been mounted."
            raise ConfigurationError(msg)
