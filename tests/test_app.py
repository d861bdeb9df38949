"""Tests for clickwrap.app — Site registration, freezing and lifespan."""

from typing import Any

import pytest

from clickwrap.app import Site
from clickwrap.config import SiteConfig
from clickwrap.errors import ConfigurationError
from clickwrap.http.request import Request
from clickwrap.http.response import Response
from clickwrap.testing import TestClient


async def _lifespan(site: Site) -> list[dict[str, Any]]:
    incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
    sent: list[dict[str, Any]] = []

    async def receive() -> dict[str, Any]:
        return incoming.pop(0)

    async def send(message: dict[str, Any]) -> None:
        sent.append(message)

    await site({"type": "lifespan"}, receive, send)
    return sent


class TestRegistration:
    @pytest.mark.asyncio
    async def test_decorator_and_path_params(self) -> None:
        site = Site(SiteConfig())

        @site.route("/items/{item}")
        def show(request: Request, item: str) -> str:
            return f"{request.method} {item}"

        response = await TestClient(site).get("/items/42")
        assert response.status == 200
        assert response.text == "GET 42"

    @pytest.mark.asyncio
    async def test_async_handler_returning_response(self) -> None:
        site = Site(SiteConfig())

        @site.route("/data", methods=["post"])
        async def data(request: Request) -> Response:
            return Response("ok", status=201, content_type="text/plain")

        response = await TestClient(site).post("/data")
        assert response.status == 201
        assert response.content_type == "text/plain"

    @pytest.mark.asyncio
    async def test_unsupported_return_is_500(self) -> None:
        site = Site(SiteConfig())
        site.add_route("/bad", lambda request: 42)
        response = await TestClient(site).get("/bad")
        assert response.status == 500

    @pytest.mark.asyncio
    async def test_no_routes_after_freeze(self) -> None:
        site = Site(SiteConfig())
        site.add_route("/", lambda request: "home")
        await TestClient(site).get("/")
        with pytest.raises(RuntimeError):
            site.add_route("/late", lambda request: "late")

    def test_ambiguous_routes_fail_at_freeze(self) -> None:
        site = Site(SiteConfig())
        site.add_route("/versions/{version}", lambda request, version: version)
        site.add_route("/versions/{name}", lambda request, name: name)
        with pytest.raises(ConfigurationError):
            _ = site.router


class TestLifespan:
    @pytest.mark.asyncio
    async def test_startup_and_shutdown(self) -> None:
        site = Site(SiteConfig())
        site.add_route("/", lambda request: "home")
        sent = await _lifespan(site)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    @pytest.mark.asyncio
    async def test_startup_failure_reported(self) -> None:
        site = Site(SiteConfig())
        site.add_route("/a/{x}", lambda request, x: x)
        site.add_route("/a/{y}", lambda request, y: y)
        sent = await _lifespan(site)
        assert sent[0]["type"] == "lifespan.startup.failed"
        assert "ambiguous" in sent[0]["message"]
