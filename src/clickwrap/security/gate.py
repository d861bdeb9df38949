"""Agreement gate — cookie-based access to protected pages.

A request is *verified* when its gate cookie holds exactly the current
agreement version. Anything else (no cookie, empty value, an older
version) is *unverified* and is redirected to the agreement prompt with
the original path preserved in ``destination``.

The cookie carries no signature. Trust comes only from string equality
with the version held in memory, so publishing a new agreement version
re-prompts everyone.

Usage::

    gate = AgreementGate(config, content.agreement)

    @site.route("/versions/{version}")
    @gate.require_agreement
    async def serve_version(request, version): ...
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import wraps
from typing import Any
from urllib.parse import urlencode

from clickwrap._internal.invoke import invoke
from clickwrap.agreement import AgreementRecord
from clickwrap.config import SiteConfig
from clickwrap.http.cookies import EPOCH, SetCookie
from clickwrap.http.forms import FormData, FormLimits
from clickwrap.http.request import Request
from clickwrap.http.response import Redirect

_log = logging.getLogger("clickwrap.security")

AGREE_PATH = "/agree"
VERSION_FIELD = "version"

# Length of a short date token (YY-MM-DD); the value limit never drops below it
DATE_TOKEN_LENGTH = len("YY-MM-DD")


def safe_destination(value: str | None) -> str:
    """Return *value* if it is a same-site path, else ``/``.

    Rejects absolute URLs and protocol-relative ``//host`` paths so the
    post-agreement redirect can't be pointed off-site.
    """
    if not value or not value.startswith("/") or value.startswith("//") or "\\" in value:
        return "/"
    return value


class AgreementGate:
    """Decides whether a request may reach a protected handler.

    Holds a reference to the process-wide ``AgreementRecord`` and never
    mutates it.
    """

    __slots__ = ("_agreement", "_config")

    def __init__(self, config: SiteConfig, agreement: AgreementRecord) -> None:
        self._config = config
        self._agreement = agreement

    @property
    def agreement(self) -> AgreementRecord:
        return self._agreement

    @property
    def cookie_name(self) -> str:
        return self._config.cookie_name

    def is_verified(self, request: Request) -> bool:
        """True iff the gate cookie equals the current agreement version."""
        value = request.cookies.get(self._config.cookie_name)
        return bool(value) and value == self._agreement.version

    def prompt_redirect(self, request: Request) -> Redirect:
        """303 to the agreement prompt, remembering where the reader was going."""
        location = f"{AGREE_PATH}?{urlencode({'destination': request.url})}"
        return Redirect(location, status=303)

    def require_agreement(self, handler: Callable[..., Any]) -> Callable[..., Any]:
        """Decorate a handler so unverified requests are redirected.

        The wrapped handler must take the request as its first argument.
        """

        @wraps(handler)
        async def wrapper(request: Request, *args: Any, **kwargs: Any) -> Any:
            if not self.is_verified(request):
                _log.debug("gate: unverified request for %s", request.path)
                return self.prompt_redirect(request)
            return await invoke(handler, request, *args, **kwargs)

        return wrapper

    # -- Agreement submission --

    def form_limits(self) -> FormLimits:
        """Limits for the agreement form: one ``version`` field, one part."""
        return FormLimits(
            fields=1,
            parts=1,
            field_name_size=len(VERSION_FIELD),
            field_size=max(DATE_TOKEN_LENGTH, len(self._agreement.version)),
        )

    def accepts(self, form: FormData) -> bool:
        """True iff the form agrees to exactly the current version."""
        field = form.get(VERSION_FIELD)
        if field is None or field.truncated:
            return False
        return field.value == self._agreement.version

    # -- Cookie issuance --

    def issue_cookie(self, now: datetime | None = None) -> SetCookie:
        """Gate cookie for the current version, valid for the configured days."""
        now = now or datetime.now(UTC)
        return SetCookie(
            name=self._config.cookie_name,
            value=self._agreement.version,
            expires=now + timedelta(days=self._config.cookie_max_age_days),
            secure=self._config.production,
        )

    def cleared_cookie(self) -> SetCookie:
        """Gate cookie with an empty value and an expiry in the past."""
        return SetCookie(
            name=self._config.cookie_name,
            value="",
            expires=EPOCH,
            secure=self._config.production,
        )
