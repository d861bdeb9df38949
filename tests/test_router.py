"""Tests for clickwrap.routing.router — compiled trie-based router."""

import pytest

from clickwrap.errors import ConfigurationError, MethodNotAllowed, RouteNotFound
from clickwrap.routing.route import Route
from clickwrap.routing.router import Router, parse_path


def _handler() -> str:
    return "ok"


def _other() -> str:
    return "other"


def _route(path: str, methods: frozenset[str] | None = None, handler=_handler) -> Route:
    return Route(path=path, handler=handler, methods=methods or frozenset({"GET"}))


def _router(*routes: Route) -> Router:
    router = Router()
    for route in routes:
        router.add(route)
    router.compile()
    return router


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/agree")
        assert len(segments) == 1
        assert segments[0].value == "agree"
        assert segments[0].is_param is False

    def test_param(self) -> None:
        segments = parse_path("/versions/{version}")
        assert [s.is_param for s in segments] == [False, True]
        assert segments[1].param_name == "version"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_requires_leading_slash(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_path("agree")

    @pytest.mark.parametrize("path", ["/share/<slug>", "/share/:slug", "/v{id}", "/{1bad}"])
    def test_rejects_unsupported_segments(self, path: str) -> None:
        with pytest.raises(ConfigurationError):
            parse_path(path)


class TestRouterMatching:
    def test_root(self) -> None:
        router = _router(_route("/"))
        match = router.match("GET", "/")
        assert match.handler is _handler
        assert match.path_params == {}

    def test_param_extracted(self) -> None:
        router = _router(_route("/versions/{version}"))
        match = router.match("GET", "/versions/1.2.3")
        assert match.path_params == {"version": "1.2.3"}

    def test_literal_beats_param(self) -> None:
        router = _router(
            _route("/versions/{version}"),
            _route("/versions/latest", handler=_other),
        )
        assert router.match("GET", "/versions/latest").handler is _other
        assert router.match("GET", "/versions/1.0.0").handler is _handler

    def test_trailing_slash_ignored(self) -> None:
        router = _router(_route("/agree"))
        assert router.match("GET", "/agree/").handler is _handler

    def test_deeper_path_not_found(self) -> None:
        router = _router(_route("/versions/{version}"))
        with pytest.raises(RouteNotFound):
            router.match("GET", "/versions/1.2.3/terms")

    def test_unknown_path_not_found(self) -> None:
        router = _router(_route("/"))
        with pytest.raises(RouteNotFound) as exc_info:
            router.match("GET", "/missing")
        assert exc_info.value.status == 404

    def test_wrong_method(self) -> None:
        router = _router(_route("/stripe-webhook", frozenset({"POST"})))
        with pytest.raises(MethodNotAllowed) as exc_info:
            router.match("GET", "/stripe-webhook")
        assert exc_info.value.status == 405
        assert ("Allow", "POST") in exc_info.value.headers

    def test_methods_on_one_pattern(self) -> None:
        router = _router(
            _route("/agree", frozenset({"GET"})),
            _route("/agree", frozenset({"POST"}), handler=_other),
        )
        assert router.match("GET", "/agree").handler is _handler
        assert router.match("POST", "/agree").handler is _other


class TestRouterResolve:
    def test_resolve_ignores_method(self) -> None:
        router = _router(_route("/stripe-webhook", frozenset({"POST"})))
        match = router.resolve("/stripe-webhook")
        assert match is not None
        assert match.handler is _handler

    def test_resolve_absent(self) -> None:
        router = _router(_route("/"))
        assert router.resolve("/nowhere") is None


class TestRouterConstruction:
    def test_conflicting_param_names(self) -> None:
        router = Router()
        router.add(_route("/versions/{version}"))
        with pytest.raises(ConfigurationError, match="ambiguous"):
            router.add(_route("/versions/{name}/terms"))

    def test_duplicate_method(self) -> None:
        router = Router()
        router.add(_route("/agree"))
        with pytest.raises(ConfigurationError):
            router.add(_route("/agree/"))

    def test_no_methods(self) -> None:
        with pytest.raises(ConfigurationError):
            Router().add(Route(path="/", handler=_handler, methods=frozenset()))

    def test_add_after_compile(self) -> None:
        router = _router(_route("/"))
        with pytest.raises(RuntimeError):
            router.add(_route("/agree"))

    def test_routes_lists_everything(self) -> None:
        router = _router(_route("/"), _route("/agree"), _route("/versions/{version}"))
        assert sorted(r.path for r in router.routes) == ["/", "/agree", "/versions/{version}"]
