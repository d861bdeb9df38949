"""Clickwrap exception hierarchy.

Shared across the router, the gate, the body reader, the webhook path and
the dispatcher so every module raises and catches the same types.
"""

from dataclasses import dataclass


class ClickwrapError(Exception):
    """Base for all clickwrap-specific errors."""


class ConfigurationError(ClickwrapError):
    """Raised when site configuration or content is invalid.

    Raised at startup (``SiteConfig.from_env()``, ``load_site_content()``,
    ``Router.add()``) so a broken deployment fails before serving.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(ClickwrapError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, the body reader, the form parser and handlers.
    The dispatcher catches these and builds the matching response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the path matched but not for this HTTP method."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail or f"Method not allowed. Allowed methods: {allow_value}",
            headers=(("Allow", allow_value),),
        )


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — the request body exceeded the configured byte ceiling."""

    def __init__(self, limit: int, detail: str = "") -> None:
        super().__init__(
            status=413,
            detail=detail or f"Request body exceeds {limit} bytes",
        )


class InvalidSignature(HTTPError):  # noqa: N818
    """400 — a webhook signature header is missing, malformed or wrong."""

    def __init__(self, detail: str = "Invalid webhook signature") -> None:
        super().__init__(status=400, detail=detail)


class ClientDisconnect(HTTPError):  # noqa: N818
    """400 — the client went away before the whole body arrived.

    Raised by ``Request.stream()`` so a partial body is never handed on
    as if it were complete.
    """

    def __init__(self, detail: str = "Client disconnected before the body was complete") -> None:
        super().__init__(status=400, detail=detail)


class MalformedForm(HTTPError):  # noqa: N818
    """400 — a form body broke the parser's structural limits."""

    def __init__(self, detail: str = "Malformed form body") -> None:
        super().__init__(status=400, detail=detail)


class InternalFailure(ClickwrapError):
    """500 — an unexpected failure while handling a request.

    Carries the request id shown to the user as a support reference.
    The original exception is chained as ``__cause__``.
    """

    def __init__(self, request_id: str) -> None:
        self.request_id = request_id
        super().__init__(f"Internal failure (request {request_id})")
