"""Pipeline configuration.

PipelineConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass

from wren.preload.registry import PreloadMode
from wren.routing.definition import HTTP_METHODS


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Pipeline configuration. Immutable after creation.

    Override what you need::

        config = PipelineConfig(preload_mode=PreloadMode.SEQUENTIAL, debug=True)
    """

    # Applied to the preloader registry when the pipeline is created;
    # None leaves the registry's current mode alone
    preload_mode: PreloadMode | str | None = None

    # Recognized verbs; "ALL" is always accepted on top of these
    methods: frozenset[str] = HTTP_METHODS

    # Log the bound route table at INFO after mount; logger levels are
    # left to the caller
    debug: bool = False
    logger_name: str = "wren"
