"""Tests for the HTTP primitives: Request, Headers, QueryParams and Response."""

from typing import Any

import pytest

from clickwrap.http.cookies import SetCookie
from clickwrap.http.headers import Headers
from clickwrap.http.query import QueryParams
from clickwrap.http.request import Request, normalize_path
from clickwrap.http.response import Redirect, Response, empty


async def _receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


class TestNormalizePath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("", "/"), ("/", "/"), ("//versions///1.2.3", "/versions/1.2.3"), ("/agree/", "/agree/")],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_path(raw) == expected


class TestRequest:
    def test_from_asgi(self) -> None:
        scope = {
            "type": "http",
            "method": "get",
            "path": "//versions/1.2.3",
            "query_string": b"x=1&x=2",
            "headers": [(b"Cookie", b"agreed=2024-01-01"), (b"content-length", b"12")],
        }
        request = Request.from_asgi(scope, _receive)
        assert request.method == "GET"
        assert request.path == "/versions/1.2.3"
        assert request.url == "/versions/1.2.3?x=1&x=2"
        assert request.query["x"] == "1"
        assert request.cookies == {"agreed": "2024-01-01"}
        assert request.content_length == 12
        assert len(request.request_id) == 32

    def test_request_ids_differ(self) -> None:
        scope = {"type": "http", "method": "GET", "path": "/"}
        first = Request.from_asgi(scope, _receive)
        second = Request.from_asgi(scope, _receive)
        assert first.request_id != second.request_id

    def test_invalid_content_length(self) -> None:
        scope = {"type": "http", "method": "POST", "path": "/", "headers": [(b"content-length", b"lots")]}
        assert Request.from_asgi(scope, _receive).content_length is None

    def test_with_path_params(self) -> None:
        request = Request.from_asgi({"type": "http", "method": "GET", "path": "/"}, _receive)
        updated = request.with_path_params({"version": "1.2.3"})
        assert updated.path_params == {"version": "1.2.3"}
        assert request.path_params == {}


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"Stripe-Signature", b"t=1,v1=abc"),))
        assert headers["stripe-signature"] == "t=1,v1=abc"
        assert headers.get("STRIPE-SIGNATURE") == "t=1,v1=abc"
        assert headers.get("missing") is None

    def test_repeated(self) -> None:
        headers = Headers(((b"accept", b"a"), (b"Accept", b"b")))
        assert headers["accept"] == "a"
        assert len(headers) == 1


class TestQueryParams:
    def test_blank_values_kept(self) -> None:
        query = QueryParams(b"destination=&x=1")
        assert query["destination"] == ""
        assert query.get("missing") is None
        assert query.raw == b"destination=&x=1"


class TestResponse:
    def test_chaining_is_immutable(self) -> None:
        base = Response("hello")
        changed = base.with_header("X-Test", "1").with_cookie(SetCookie("a", "b"))
        assert base.headers == ()
        assert base.cookies == ()
        assert changed.header("x-test") == "1"
        assert [cookie.name for cookie in changed.cookies] == ["a"]
        assert changed.body == "hello"

    def test_without_caching(self) -> None:
        response = Response("x").without_caching()
        assert response.header("pragma") == "no-cache"
        assert response.header("expires") == "0"
        assert response.header("surrogate-control") == "no-store"

    def test_cookie_replaced_by_name(self) -> None:
        response = Response().with_cookie(SetCookie("agreed", "")).with_cookie(SetCookie("agreed", "v"))
        assert [c.value for c in response.cookies] == ["v"]

    def test_empty(self) -> None:
        response = empty(413)
        assert response.status == 413
        assert response.body_bytes == b""

    def test_redirect(self) -> None:
        response = Redirect("/agree").to_response()
        assert response.status == 303
        assert response.header("location") == "/agree"
