"""Bounded request body reading.

``read_bounded()`` is the only way handlers get at request bytes. It never
truncates: a body over the ceiling is an error, raised before the excess is
buffered. The result is a ``RawBody`` so code that needs the exact bytes
received on the wire (webhook signature checks) can insist on that type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from clickwrap.errors import PayloadTooLarge

if TYPE_CHECKING:
    from clickwrap.http.request import Request

DEFAULT_LIMIT = 32768


@dataclass(frozen=True, slots=True)
class RawBody:
    """Request body bytes exactly as received, never parsed or re-encoded."""

    data: bytes


async def read_bounded(request: Request, limit: int = DEFAULT_LIMIT) -> RawBody:
    """Read the whole request body, up to *limit* bytes.

    Raises ``PayloadTooLarge`` if the declared ``Content-Length`` or the
    bytes actually received exceed *limit*. The check happens before a
    chunk is appended, so at most *limit* bytes are ever held.
    """
    declared = request.content_length
    if declared is not None and declared > limit:
        raise PayloadTooLarge(limit, f"Declared Content-Length {declared} exceeds {limit} bytes")

    buffer = bytearray()
    async for chunk in request.stream():
        if len(buffer) + len(chunk) > limit:
            raise PayloadTooLarge(limit)
        buffer.extend(chunk)
    return RawBody(bytes(buffer))
