"""Tests for wren.loader — directory walking and route file imports."""

from pathlib import Path

import pytest

from wren.errors import ConfigurationError
from wren.loader import load_definitions

ROUTE = """
def respond(request, response, next):
    response.send({body!r})

route = {{"path": {path!r}, "method": "GET", "respond": respond}}
"""


def _write_route(path: Path, url: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(ROUTE.format(body=url, path=url))


class TestLoadDefinitions:
    def test_sorted_files_then_groups(self, tmp_path: Path) -> None:
        _write_route(tmp_path / "b.py", "/b")
        _write_route(tmp_path / "a.py", "/a")
        _write_route(tmp_path / "admin" / "users.py", "/admin/users")
        _write_route(tmp_path / "admin" / "deep" / "x.py", "/admin/deep/x")

        found = load_definitions(tmp_path)

        assert [value["path"] for _, value in found] == [
            "/a",
            "/b",
            "/admin/users",
            "/admin/deep/x",
        ]
        assert found[0][0] == str(tmp_path.resolve() / "a.py")

    def test_skips_index_and_marked_entries(self, tmp_path: Path) -> None:
        _write_route(tmp_path / "home.py", "/")
        _write_route(tmp_path / "index.py", "/index")
        _write_route(tmp_path / "__init__.py", "/init")
        _write_route(tmp_path / "_helpers.py", "/helpers")
        _write_route(tmp_path / ".scratch.py", "/scratch")
        _write_route(tmp_path / "_private" / "x.py", "/private")
        _write_route(tmp_path / ".hidden" / "x.py", "/hidden")
        (tmp_path / "notes.txt").write_text("not a route")

        found = load_definitions(tmp_path)

        assert [value["path"] for _, value in found] == ["/"]

    def test_routes_list(self, tmp_path: Path) -> None:
        (tmp_path / "many.py").write_text(
            "def r(request, response, next): pass\n"
            "routes = [\n"
            "    {'path': '/one', 'method': 'GET', 'respond': r},\n"
            "    {'path': '/two', 'method': 'GET', 'respond': r},\n"
            "]\n"
        )
        found = load_definitions(tmp_path)
        assert [value["path"] for _, value in found] == ["/one", "/two"]

    def test_module_as_definition(self, tmp_path: Path) -> None:
        (tmp_path / "ping.py").write_text(
            "path = '/ping'\n"
            "method = 'GET'\n"
            "def respond(request, response, next):\n"
            "    response.send('pong')\n"
        )
        [(source, module)] = load_definitions(tmp_path)
        assert module.path == "/ping"
        assert source.endswith("ping.py")

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            load_definitions(tmp_path / "nope")

    def test_import_error_names_file(self, tmp_path: Path) -> None:
        (tmp_path / "broken.py").write_text("raise RuntimeError('bad import')\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_definitions(tmp_path)
        assert exc_info.value.source is not None
        assert exc_info.value.source.endswith("broken.py")
        assert "bad import" in str(exc_info.value)

    def test_file_without_route(self, tmp_path: Path) -> None:
        (tmp_path / "empty.py").write_text("x = 1\n")
        with pytest.raises(ConfigurationError):
            load_definitions(tmp_path)
