"""Error responses for the dispatcher.

Validation-class failures (oversized body, bad signature, bad form) become
bare status responses. Not-found renders the site's 404 page, a wrong
method gets plain text, and anything unexpected renders the 500 page
with the request id. Internal detail only ever reaches the log.
"""

import logging

from kida import Environment

from clickwrap.errors import HTTPError, InternalFailure, MethodNotAllowed, RouteNotFound
from clickwrap.http.request import Request
from clickwrap.http.response import Response, empty
from clickwrap.templating import Template, render_template

logger = logging.getLogger("clickwrap.server")


def not_found_page() -> Template:
    return Template(
        "not_found.html",
        status=404,
        title="Not Found",
        description="",
        social=False,
    )


def handle_http_error(exc: HTTPError, request: Request, kida_env: Environment) -> Response:
    """Map an HTTPError to its response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    if isinstance(exc, RouteNotFound):
        page = not_found_page()
        return Response(body=render_template(kida_env, page), status=404)

    if isinstance(exc, MethodNotAllowed):
        resp = Response(
            body="Method Not Allowed",
            status=405,
            content_type="text/plain; charset=utf-8",
        )
    else:
        resp = empty(exc.status)

    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(
    failure: InternalFailure, request: Request, kida_env: Environment
) -> Response:
    """Log an unexpected failure and render the 500 page with its request id.

    The traceback of the original exception (``failure.__cause__``) goes to
    the log only.
    """
    logger.error(
        "500 %s %s (request %s)",
        request.method,
        request.path,
        failure.request_id,
        exc_info=failure.__cause__ or failure,
    )
    page = Template(
        "internal_error.html",
        status=500,
        title="Internal Error",
        description="",
        social=False,
        request_id=failure.request_id,
    )
    try:
        body = render_template(kida_env, page)
    except Exception:
        logger.exception("rendering the 500 page failed (request %s)", failure.request_id)
        return Response(
            body=f"Internal Error. Support number: {failure.request_id}",
            status=500,
            content_type="text/plain; charset=utf-8",
        )
    return Response(body=body, status=500)
