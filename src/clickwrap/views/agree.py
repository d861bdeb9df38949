"""The agreement prompt: ``GET /agree`` shows it, ``POST /agree`` accepts it.

A mismatched or missing version is not an error. The prompt is simply
shown again with the gate cookie cleared. Only a body that breaks the
form parser's structural limits gets a 400.
"""

import logging

from kida import Environment

from clickwrap.config import SiteConfig
from clickwrap.content import SiteContent
from clickwrap.errors import MalformedForm, PayloadTooLarge
from clickwrap.http.body import read_bounded
from clickwrap.http.forms import parse_bounded_form
from clickwrap.http.request import Request
from clickwrap.http.response import Redirect, Response
from clickwrap.security.gate import AgreementGate, safe_destination
from clickwrap.templating import render_template
from clickwrap.views.pages import page

_log = logging.getLogger("clickwrap.security")

# A one-field form is a few hundred bytes even as multipart
MAX_FORM_BODY = 4096


class AgreeView:
    """Handler for ``/agree``."""

    __slots__ = ("_config", "_content", "_gate", "_kida_env")

    def __init__(
        self,
        config: SiteConfig,
        content: SiteContent,
        gate: AgreementGate,
        kida_env: Environment,
    ) -> None:
        self._config = config
        self._content = content
        self._gate = gate
        self._kida_env = kida_env

    async def __call__(self, request: Request) -> Response | Redirect:
        if request.method == "POST":
            return await self.submit(request)
        return self.prompt()

    def prompt(self) -> Response:
        """The agreement page, with the gate cookie cleared and caching off."""
        agreement = self._content.agreement
        tpl = page(
            "agree.html",
            self._config,
            title=agreement.title,
            description=agreement.description or None,
            agreement=agreement,
            body=self._content.agreement_html,
        )
        return (
            Response(body=render_template(self._kida_env, tpl))
            .without_caching()
            .with_cookie(self._gate.cleared_cookie())
        )

    async def submit(self, request: Request) -> Response | Redirect:
        try:
            raw = await read_bounded(request, MAX_FORM_BODY)
        except PayloadTooLarge as exc:
            raise MalformedForm("Agreement form body too large") from exc

        form = parse_bounded_form(raw.data, request.content_type, self._gate.form_limits())

        if not self._gate.accepts(form):
            _log.debug("agreement mismatch (request %s)", request.request_id)
            return self.prompt()

        destination = safe_destination(request.query.get("destination"))
        _log.info(
            "agreement %s accepted (request %s)",
            self._gate.agreement.version,
            request.request_id,
        )
        return Redirect(destination, status=303).with_cookie(self._gate.issue_cookie())
