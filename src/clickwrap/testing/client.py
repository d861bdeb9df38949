"""Async test client for clickwrap sites.

Uses the same Request and Response types as production.
No wrapper translation layer.
"""

from typing import Any
from urllib.parse import urlencode

from clickwrap.app import Site
from clickwrap.http.response import Response


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for clickwrap sites.

    Returns the same ``Response`` type used in production. Sends requests
    through the ASGI interface directly, no HTTP involved. Set-Cookie
    headers are kept in ``response.headers``; see ``set_cookies()``.
    """

    __slots__ = ("site",)

    def __init__(self, site: Site) -> None:
        self.site = site

    async def __aenter__(self) -> "TestClient":
        self.site._ensure_frozen()
        return self

    async def __aexit__(self, *args: object) -> None:
        pass

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
    ) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers, cookies=cookies)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
        body: bytes | None = None,
        form: dict[str, str] | None = None,
    ) -> Response:
        """Send a POST request. ``form`` is sent url-encoded."""
        extra_headers: dict[str, str] = {}
        request_body = body or b""

        if form is not None:
            request_body = urlencode(form).encode("utf-8")
            extra_headers["content-type"] = "application/x-www-form-urlencoded"

        merged = {**extra_headers, **(headers or {})}
        return await self.request(
            "POST", path, headers=merged, cookies=cookies, body=request_body
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
        body: bytes | None = None,
        chunk_size: int | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app.

        ``chunk_size`` splits the body across several ``http.request``
        messages, the way a server delivers a large upload.
        """
        # Split path and query string
        if "?" in path:
            path_part, query_string = path.split("?", 1)
        else:
            path_part = path
            query_string = ""

        # Build raw ASGI headers
        raw_headers: list[tuple[bytes, bytes]] = []
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
        if cookies:
            cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
            raw_headers.append((b"cookie", cookie_header.encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        request_body = body or b""
        if chunk_size:
            chunks = [
                request_body[i : i + chunk_size]
                for i in range(0, len(request_body), chunk_size)
            ] or [b""]
        else:
            chunks = [request_body]
        pending = list(chunks)

        async def receive() -> dict[str, Any]:
            if pending:
                chunk = pending.pop(0)
                return {"type": "http.request", "body": chunk, "more_body": bool(pending)}
            return {"type": "http.disconnect"}

        # Capture response via send
        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.site(scope, receive, send)

        body_bytes = b"".join(response_body_parts)

        content_type = "text/html; charset=utf-8"
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name_str = name_b.decode("latin-1")
            value_str = value_b.decode("latin-1")
            if name_str == "content-type":
                content_type = value_str
            elif name_str != "content-length":
                extra_headers.append((name_str, value_str))

        return Response(
            body=body_bytes,
            status=response_status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )


def set_cookies(response: Response) -> dict[str, str]:
    """Map cookie name to the full Set-Cookie header value it was sent with."""
    cookies: dict[str, str] = {}
    for name, value in response.headers:
        if name.lower() == "set-cookie":
            cookie_name = value.split("=", 1)[0]
            cookies[cookie_name] = value
    return cookies
