"""Immutable HTTP request.

Frozen metadata with async body access. The body is never buffered here;
callers that need it go through ``clickwrap.http.body.read_bounded`` so
every read is size-limited.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from clickwrap._internal.asgi import Receive
from clickwrap.errors import ClientDisconnect
from clickwrap.http.cookies import parse_cookies
from clickwrap.http.headers import Headers
from clickwrap.http.query import QueryParams


def normalize_path(path: str) -> str:
    """Collapse an incoming path into the form the router matches on.

    Empty paths become ``/`` and runs of slashes collapse to one. A
    trailing slash is kept; the router ignores it.
    """
    if not path:
        return "/"
    parts = [p for p in path.split("/") if p]
    normalized = "/" + "/".join(parts)
    if path.endswith("/") and parts:
        normalized += "/"
    return normalized


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Cookies are parsed once at creation time (in ``from_asgi``) and stored
    as a frozen field. ``request_id`` correlates log lines with the
    support reference shown on the 500 page.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, str]
    cookies: Mapping[str, str]
    request_id: str

    # Private: ASGI receive callable for body streaming
    _receive: Receive = field(repr=False, compare=False)

    # Private: mutable state shared by copies made with ``with_path_params``
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int, or None if absent or invalid."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent it."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks.

        The ASGI receive channel can be consumed once; a second call
        raises ``RuntimeError``. A disconnect before the last chunk raises
        ``ClientDisconnect``.
        """
        if self._cache.get("_consumed"):
            msg = "Request body has already been consumed."
            raise RuntimeError(msg)
        self._cache["_consumed"] = True
        while True:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                raise ClientDisconnect()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy carrying the router's extracted parameters."""
        return replace(self, path_params=path_params)

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        headers = Headers(tuple(scope.get("headers", ())))
        return cls(
            method=scope["method"].upper(),
            path=normalize_path(scope.get("path", "")),
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            path_params={},
            cookies=parse_cookies(headers.get("cookie")),
            request_id=uuid.uuid4().hex,
            _receive=receive,
        )
