"""Static assets served verbatim from the static directory.

Each asset is registered as its own route, so only the configured file
names are reachable and there is no path traversal to guard against.
"""

import mimetypes
from pathlib import Path

import anyio

from clickwrap.errors import RouteNotFound
from clickwrap.http.request import Request
from clickwrap.http.response import Response


class StaticFile:
    """Handler serving one file, with a guessed content type.

    A missing file is a 404, not a 500; the asset list is fixed but the
    files are deployment content.
    """

    __slots__ = ("_cache_control", "_content_type", "_path")

    def __init__(self, path: Path, *, cache_control: str = "public, max-age=3600") -> None:
        self._path = path
        self._cache_control = cache_control
        content_type, _ = mimetypes.guess_type(path.name)
        self._content_type = content_type or "application/octet-stream"

    @property
    def path(self) -> Path:
        return self._path

    async def __call__(self, request: Request) -> Response:
        try:
            body = await anyio.Path(self._path).read_bytes()
        except FileNotFoundError:
            raise RouteNotFound(f"Static file {self._path.name} is missing") from None
        return Response(body=body, content_type=self._content_type).with_header(
            "Cache-Control", self._cache_control
        )
