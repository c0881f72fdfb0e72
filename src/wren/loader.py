"""Route-definition loader — walks a directory of route files.

Each ``.py`` file declares one definition as ``route``, several as
``routes``, or is itself a definition (module-level ``path``,
``method``, ``respond``). Subdirectories are nested groups, walked after
the files of their parent, so discovery order is depth-first and sorted::

    routes/
        index.py          skipped
        _helpers.py       skipped (leading underscore)
        .scratch.py       skipped (leading dot)
        home.py           route = {...}
        admin/
            users.py      routes = [{...}, {...}]

The loader only discovers; validation and ordering belong to
``wren.routing.table.assemble``.
"""

import importlib.util
import logging
from pathlib import Path
from typing import Any

from wren.errors import ConfigurationError

logger = logging.getLogger("wren.loader")

_EXCLUDED_NAMES = frozenset({"__init__.py", "index.py"})
_EXCLUDED_PREFIXES = ("_", ".")


def _is_excluded(path: Path) -> bool:
    return path.name in _EXCLUDED_NAMES or path.name.startswith(_EXCLUDED_PREFIXES)


def load_definitions(directory: str | Path) -> list[tuple[str, Any]]:
    """Walk *directory* and return ``(source, value)`` pairs.

    Raises ``ConfigurationError`` if the directory doesn't exist or a
    route file fails to import or declares nothing.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        msg = f"Routes directory not found: {root}"
        raise ConfigurationError(msg)

    found: list[tuple[str, Any]] = []
    _walk(root, found)
    logger.debug("Loaded %d route definition(s) from %s", len(found), root)
    return found


def _walk(directory: Path, found: list[tuple[str, Any]]) -> None:
    entries = sorted(p for p in directory.iterdir() if not _is_excluded(p))

    for item in entries:
        if item.is_file() and item.suffix == ".py":
            source = str(item)
            found.extend((source, value) for value in _load_file(item))

    for item in entries:
        if item.is_dir():
            _walk(item, found)


def _load_file(path: Path) -> list[Any]:
    """Import a route file and return the definitions it declares."""
    module_name = f"_wren_routes_{abs(hash(str(path)))}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = "Cannot import route file"
        raise ConfigurationError(msg, source=str(path))

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        msg = f"Route file failed to import: {exc}"
        raise ConfigurationError(msg, source=str(path)) from exc

    if hasattr(module, "routes"):
        return list(module.routes)
    if hasattr(module, "route"):
        return [module.route]
    if hasattr(module, "path"):
        # The module itself is the definition
        return [module]
    msg = "Route file declares neither 'route' nor 'routes'"
    raise ConfigurationError(msg, source=str(path))
