"""ASGI handler — the single entry point for HTTP requests.

Converts the scope into a ``Request``, resolves the normalized path
through the router, invokes the handler, and sends the result back
through ASGI ``send()``. Unmatched paths fall back to the 404 page.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from kida import Environment

from clickwrap._internal.asgi import Receive, Scope, Send
from clickwrap._internal.invoke import invoke
from clickwrap.errors import HTTPError, InternalFailure
from clickwrap.http.request import Request
from clickwrap.http.response import Redirect, Response
from clickwrap.routing.route import RouteMatch
from clickwrap.routing.router import Router
from clickwrap.server.errors import handle_http_error, handle_internal_error
from clickwrap.server.sender import send_response
from clickwrap.templating import Template, render_template

logger = logging.getLogger("clickwrap.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    kida_env: Environment,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    head = request.method == "HEAD"

    try:
        # HEAD is answered by the GET route, minus the body
        method = "GET" if head else request.method
        match = router.match(method, request.path)
        response = await _invoke_handler(match, request, kida_env)
    except HTTPError as exc:
        response = handle_http_error(exc, request, kida_env)
    except Exception as exc:
        failure = InternalFailure(request.request_id)
        failure.__cause__ = exc
        response = handle_internal_error(failure, request, kida_env)

    logger.debug(
        "%s %s -> %d (request %s)",
        request.method,
        request.path,
        response.status,
        request.request_id,
    )
    await send_response(response, send, head=head)


async def _invoke_handler(
    match: RouteMatch,
    request: Request,
    kida_env: Environment,
) -> Response:
    """Call the matched handler with the request and its path parameters."""
    request = request.with_path_params(match.path_params)
    kwargs = _build_handler_kwargs(match.handler, request, match.path_params)
    result = await invoke(match.handler, **kwargs)
    return to_response(result, kida_env)


def _build_handler_kwargs(
    handler: Callable[..., Any],
    request: Request,
    path_params: dict[str, str],
) -> dict[str, Any]:
    """Bind ``request`` and path parameters to the handler's parameters by name."""
    sig = inspect.signature(handler)
    kwargs: dict[str, Any] = {}
    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in path_params:
            kwargs[name] = path_params[name]
    return kwargs


def to_response(value: Any, kida_env: Environment) -> Response:
    """Convert a handler's return value to a Response.

    1. ``Response``  -> pass through
    2. ``Redirect``  -> status + Location
    3. ``Template``  -> render via kida
    4. ``str``       -> 200, text/html
    """
    match value:
        case Response():
            return value
        case Redirect():
            return value.to_response()
        case Template():
            return Response(body=render_template(kida_env, value), status=value.status)
        case str():
            return Response(body=value)
    msg = f"Handler returned unsupported type {type(value).__name__}"
    raise TypeError(msg)
