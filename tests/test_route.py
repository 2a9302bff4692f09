"""Tests for wren.routing.route — RouteBuilder, Route, RouteMatch."""

import logging

import pytest

from wren.errors import ConfigurationError, InvalidStateError
from wren.routing.route import Route, RouteBuilder, RouteMatch


@pytest.fixture
def web_root(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>Home</h1>")
    (root / "style.css").write_text("body { color: red; }")
    (root / "data.unknownext").write_bytes(b"\x00\x01")
    (tmp_path / "shared.txt").write_text("outside the web root")
    return root


def _builder(path: str = "a/b", file: str = "index.html") -> RouteBuilder:
    return Route.new_builder().when_requested(path).provide(file)


class TestBuilder:
    def test_fluent_setters_return_builder(self) -> None:
        builder = Route.new_builder()
        assert builder.when_requested("x") is builder
        assert builder.provide("x.txt") is builder
        assert builder.with_header("X-Foo: 1") is builder

    def test_build_returns_frozen_route(self, web_root) -> None:
        route = _builder().with_header("X-Foo: 1").build(web_root)
        assert route.request_path == "a/b"
        assert route.resolve_path == (web_root / "index.html").resolve()
        assert route.header == "X-Foo: 1"
        with pytest.raises(AttributeError):
            route.request_path = "other"  # type: ignore[misc]

    def test_parent_directory_allowed(self, web_root) -> None:
        route = _builder(file="../shared.txt").build(web_root)
        assert route.resolve_path.read_text() == "outside the web root"

    def test_absolute_path_ignores_web_root(self, web_root, tmp_path) -> None:
        route = _builder(file=str(web_root / "style.css")).build(tmp_path / "elsewhere")
        assert route.resolve_path.name == "style.css"

    def test_defaults_to_cwd(self, web_root, monkeypatch) -> None:
        monkeypatch.chdir(web_root)
        assert _builder().build().resolve_path == (web_root / "index.html").resolve()

    def test_build_logs_at_debug(self, web_root, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="wren.routing"):
            _builder().build(web_root)
        assert any("built route 'a/b'" in r.getMessage() for r in caplog.records)


class TestBuildValidation:
    def test_missing_file_raises(self, web_root) -> None:
        with pytest.raises(ConfigurationError, match="nope.html"):
            _builder(file="nope.html").build(web_root)

    def test_directory_is_not_a_file(self, web_root) -> None:
        (web_root / "sub").mkdir()
        with pytest.raises(ConfigurationError, match="doesn't exist"):
            _builder(file="sub").build(web_root)

    def test_missing_request_path_raises(self, web_root) -> None:
        with pytest.raises(ConfigurationError, match="no request path"):
            Route.new_builder().provide("index.html").build(web_root)

    def test_missing_file_path_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="no file"):
            Route.new_builder().when_requested("a").build()

    @pytest.mark.parametrize("header", ["NoColon", ": value", "Bad Name: 1"])
    def test_malformed_header_raises(self, web_root, header: str) -> None:
        with pytest.raises(ConfigurationError, match="Malformed header"):
            _builder().with_header(header).build(web_root)

    @pytest.mark.parametrize("header", ["X-Name: caf\u00e9 \u2615", "X-Name: emoji \U0001f426"])
    def test_header_value_must_be_latin1(self, web_root, header: str) -> None:
        with pytest.raises(ConfigurationError, match="latin-1"):
            _builder().with_header(header).build(web_root)

    def test_latin1_header_value_is_allowed(self, web_root) -> None:
        route = _builder().with_header("X-Name: caf\u00e9").build(web_root)
        assert route.header_pair == ("X-Name", "caf\u00e9")

    @pytest.mark.parametrize("header", ["X-A: 1\r\nX-B: 2", "X-A: 1\nX-B: 2", "X-A: 1\x002"])
    def test_header_value_line_breaks_rejected(self, web_root, header: str) -> None:
        with pytest.raises(ConfigurationError, match="line break"):
            _builder().with_header(header).build(web_root)

    @pytest.mark.parametrize("header", ["Content-Length: 3", "content-length: 3"])
    def test_content_length_header_rejected(self, web_root, header: str) -> None:
        with pytest.raises(ConfigurationError, match="computed"):
            _builder().with_header(header).build(web_root)

    def test_non_token_header_name_rejected(self, web_root) -> None:
        with pytest.raises(ConfigurationError, match="Malformed header"):
            _builder().with_header("X-Caf\u00e9: 1").build(web_root)

    def test_blank_header_is_allowed(self, web_root) -> None:
        route = _builder().with_header("   ").build(web_root)
        assert route.header_pair is None

    def test_failed_build_can_be_fixed(self, web_root) -> None:
        builder = _builder(file="nope.html")
        with pytest.raises(ConfigurationError):
            builder.build(web_root)
        assert not builder.is_built
        route = builder.provide("index.html").build(web_root)
        assert route.resolve_path.name == "index.html"


class TestBuiltState:
    def test_setters_after_build_raise(self, web_root) -> None:
        builder = _builder()
        builder.build(web_root)
        assert builder.is_built
        with pytest.raises(InvalidStateError):
            builder.when_requested("c")
        with pytest.raises(InvalidStateError):
            builder.provide("style.css")
        with pytest.raises(InvalidStateError):
            builder.with_header("X: 1")

    def test_double_build_raises(self, web_root) -> None:
        builder = _builder()
        builder.build(web_root)
        with pytest.raises(InvalidStateError, match="already built"):
            builder.build(web_root)


class TestMatches:
    def test_exact_match(self, web_root) -> None:
        assert _builder().build(web_root).matches("a/b")

    @pytest.mark.parametrize("requested", ["/a/b", "a/b/", "A/B", "a", "a/b/c", ""])
    def test_no_normalization(self, web_root, requested: str) -> None:
        assert not _builder().build(web_root).matches(requested)


class TestServe:
    def test_serves_file_bytes(self, web_root) -> None:
        response = _builder(file="style.css").build(web_root).serve()
        assert response.status == 200
        assert response.body == b"body { color: red; }"
        assert "text/css" in response.content_type
        assert response.headers == ()

    def test_unknown_extension_gets_octet_stream(self, web_root) -> None:
        response = _builder(file="data.unknownext").build(web_root).serve()
        assert response.content_type == "application/octet-stream"

    def test_header_emitted(self, web_root) -> None:
        response = _builder().with_header("X-Foo: 1").build(web_root).serve()
        assert response.headers == (("X-Foo", "1"),)

    def test_header_value_may_contain_colon(self, web_root) -> None:
        response = _builder().with_header("Link: <https://x.test/a>; rel=next").build(web_root).serve()
        assert response.header("link") == "<https://x.test/a>; rel=next"

    def test_content_type_header_replaces_guess(self, web_root) -> None:
        route = _builder().with_header("Content-Type: text/plain").build(web_root)
        response = route.serve()
        assert response.content_type == "text/plain"
        assert response.headers == ()

    def test_reads_file_at_serve_time(self, web_root) -> None:
        route = _builder().build(web_root)
        (web_root / "index.html").write_text("changed")
        assert route.serve().body == b"changed"


class TestRouteMatch:
    def test_creation(self, web_root) -> None:
        route = _builder().build(web_root)
        match = RouteMatch(route=route, response=route.serve())
        assert match.route is route
        assert match.served is True
