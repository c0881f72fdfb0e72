"""Tests for wren.pipeline — end-to-end through the recording dispatcher."""

import logging
from typing import Any

import anyio
import pytest

from wren.conditions import ConditionalRegistry
from wren.config import PipelineConfig
from wren.errors import ConfigurationError, InvalidMethod, RespondFailed, ValidationFailed
from wren.http import Request, Response
from wren.pipeline import Pipeline
from wren.preload import PreloaderRegistry, PreloadMode
from wren.testing import RecordingDispatcher
from wren.validation import required


@pytest.fixture
def pipeline() -> Pipeline:
    return Pipeline.isolated()


class TestSetup:
    def test_isolated_registries_are_fresh(self) -> None:
        a = Pipeline.isolated()
        b = Pipeline.isolated()
        assert a.conditionals is not b.conditionals
        assert a.preloaders is not b.preloaders

    def test_explicit_registries_are_used(self) -> None:
        conditionals = ConditionalRegistry()
        preloaders = PreloaderRegistry()
        pipeline = Pipeline(conditionals=conditionals, preloaders=preloaders)
        assert pipeline.conditionals is conditionals
        assert pipeline.preloaders is preloaders

    def test_config_sets_preload_mode(self) -> None:
        pipeline = Pipeline.isolated(PipelineConfig(preload_mode="sequential"))
        assert pipeline.preloaders.mode is PreloadMode.SEQUENTIAL

    def test_config_without_mode_keeps_registry_mode(self) -> None:
        preloaders = PreloaderRegistry(mode=PreloadMode.SEQUENTIAL)
        Pipeline(conditionals=ConditionalRegistry(), preloaders=preloaders)
        assert preloaders.mode is PreloadMode.SEQUENTIAL

    def test_debug_logs_table_without_touching_levels(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger = logging.getLogger("wren")
        level = logger.level
        pipeline = Pipeline.isolated(PipelineConfig(debug=True))

        @pipeline.route("/", conditions=["isAdmin"])
        def home(request: Request, response: Response, next: Any) -> None:
            response.send("home")

        with caplog.at_level(logging.INFO, logger="wren"):
            pipeline.mount(RecordingDispatcher().bind)

        assert logger.level == level
        assert any("GET / conditions=['isAdmin']" in r.getMessage() for r in caplog.records)

    def test_table_before_mount_raises(self, pipeline: Pipeline) -> None:
        with pytest.raises(ConfigurationError):
            _ = pipeline.table

    def test_registration_after_mount_raises(self, pipeline: Pipeline) -> None:
        pipeline.mount(RecordingDispatcher().bind)
        assert pipeline.mounted
        with pytest.raises(ConfigurationError):
            pipeline.conditional("late")
        with pytest.raises(ConfigurationError):
            pipeline.add({"path": "/", "method": "GET", "respond": lambda *a: None})

    def test_mount_runs_once(self, pipeline: Pipeline) -> None:
        @pipeline.route("/")
        def home(request: Request, response: Response, next: Any) -> None:
            response.send("home")

        host = RecordingDispatcher()
        first = pipeline.mount(host.bind)
        second = pipeline.mount(host.bind)
        assert first is second
        assert len(host.bindings) == 1

    def test_invalid_definition_aborts_mount(self, pipeline: Pipeline) -> None:
        pipeline.add({"path": "/", "method": "JUMP", "respond": lambda *a: None})
        host = RecordingDispatcher()
        with pytest.raises(InvalidMethod):
            pipeline.mount(host.bind)
        assert host.bindings == []

    def test_route_decorator_records_source(self, pipeline: Pipeline) -> None:
        @pipeline.route("/", method=["GET", "HEAD"], name="home")
        def home(request: Request, response: Response, next: Any) -> None:
            response.send("home")

        table = pipeline.mount(RecordingDispatcher().bind)
        definition = table[0].definition
        assert definition.name == "home"
        assert definition.methods == ("GET", "HEAD")
        assert definition.source is not None
        assert definition.source.endswith("home")


class TestDispatch:
    @pytest.mark.anyio
    async def test_narrow_route_offered_first(self, pipeline: Pipeline) -> None:
        @pipeline.conditional("isAdmin")
        def is_admin(request: Request) -> bool:
            return request.state.get("role") == "admin"

        @pipeline.route("/dashboard")
        def everyone(request: Request, response: Response, next: Any) -> None:
            response.send("public dashboard")

        @pipeline.route("/dashboard", conditions=["isAdmin"])
        def admins(request: Request, response: Response, next: Any) -> None:
            response.send("admin dashboard")

        host = RecordingDispatcher()
        pipeline.mount(host.bind)

        admin = await host.dispatch(Request(path="/dashboard", state={"role": "admin"}))
        assert admin.handled
        assert admin.response.body == "admin dashboard"

        guest = await host.dispatch(Request(path="/dashboard"))
        assert guest.handled
        assert guest.tried == 2
        assert guest.passes == ["admins"]
        assert guest.response.body == "public dashboard"

    @pytest.mark.anyio
    async def test_preloaded_data_reaches_responder(self, pipeline: Pipeline) -> None:
        @pipeline.preloader("test0")
        async def test0(request: Request) -> str:
            await anyio.sleep(0.05)
            return "data0"

        @pipeline.preloader("test1")
        async def test1(request: Request) -> str:
            await anyio.sleep(0.01)
            return "data1"

        @pipeline.route("/data", preload=["test0", "test1"])
        def data(request: Request, response: Response, next: Any) -> None:
            response.json(dict(request.preloaded))

        host = RecordingDispatcher()
        pipeline.mount(host.bind)

        result = await host.dispatch(Request(path="/data"))
        assert result.response.body == {"test0": "data0", "test1": "data1"}
        assert result.response.headers["content-type"] == "application/json"

    @pytest.mark.anyio
    async def test_validation_error_reaches_host(self, pipeline: Pipeline) -> None:
        def validate(request: Request, response: Response) -> None:
            request.check({"title": [required]})

        @pipeline.route("/posts", method="POST", validate=validate)
        def create(request: Request, response: Response, next: Any) -> None:
            response.send("created", status=201)

        host = RecordingDispatcher()
        pipeline.mount(host.bind)

        result = await host.dispatch(Request(method="POST", path="/posts"))
        assert isinstance(result.error, ValidationFailed)
        assert result.error.to_dict()["code"] == "InvalidParameters"
        assert not result.response.sent

        ok = await host.dispatch(Request(method="POST", path="/posts", body={"title": "Hi"}))
        assert ok.handled
        assert ok.response.status == 201

    @pytest.mark.anyio
    async def test_responder_failure_reaches_host(self, pipeline: Pipeline) -> None:
        @pipeline.route("/crash", method="ALL")
        async def crash(request: Request, response: Response, next: Any) -> None:
            raise LookupError("missing row")

        host = RecordingDispatcher()
        pipeline.mount(host.bind)

        result = await host.dispatch(Request(method="DELETE", path="/crash"))
        assert isinstance(result.error, RespondFailed)
        assert isinstance(result.error.error, LookupError)

    @pytest.mark.anyio
    async def test_unmatched_request(self, pipeline: Pipeline) -> None:
        host = RecordingDispatcher()
        pipeline.mount(host.bind)
        result = await host.dispatch(Request(path="/nowhere"))
        assert not result.handled
        assert result.error is None
        assert result.tried == 0
