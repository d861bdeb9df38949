"""Informational pages and the gated version documents."""

import logging
from pathlib import Path
from typing import Any

import anyio
import yaml
from kida import Environment

from clickwrap.config import SiteConfig
from clickwrap.content import SiteContent
from clickwrap.errors import RouteNotFound
from clickwrap.http.request import Request
from clickwrap.http.response import Response
from clickwrap.templating import Template, render_template

logger = logging.getLogger("clickwrap.server")


def page(
    name: str,
    config: SiteConfig,
    *,
    title: str | None = None,
    description: str | None = None,
    social: bool = True,
    status: int = 200,
    **context: Any,
) -> Template:
    """A site page with the shared layout's title and meta tags filled in."""
    return Template(
        name,
        status=status,
        title=title or config.site_name,
        description=description if description is not None else config.slogan,
        social=social,
        **context,
    )


class Pages:
    """Handlers for ``/``, ``/pay``, ``/privacy`` and ``/versions/{version}``."""

    __slots__ = ("_config", "_content", "_kida_env")

    def __init__(self, config: SiteConfig, content: SiteContent, kida_env: Environment) -> None:
        self._config = config
        self._content = content
        self._kida_env = kida_env

    def home(self, request: Request) -> Response:
        tpl = page("home.html", self._config, about=self._content.about_html)
        return Response(body=render_template(self._kida_env, tpl)).without_caching()

    def pay(self, request: Request) -> Response:
        raise RouteNotFound("Payments are not open yet")

    def privacy(self, request: Request) -> Response:
        raise RouteNotFound("No privacy policy published yet")

    async def version(self, request: Request, version: str) -> Template:
        """Render one published version's prompts, order form and terms.

        Unpublished versions are a 404. Read or parse failures propagate
        and become the 500 page.
        """
        if version not in self._content.versions:
            raise RouteNotFound(f"Version {version!r} is not published")

        logger.info("serving version %s (request %s)", version, request.request_id)
        documents = await read_version_documents(self._config.versions_dir / version)
        return page(
            "version.html",
            self._config,
            title=f"{self._config.site_name} {version}",
            version=version,
            latest=self._content.latest_version,
            **documents,
        )

    def internal_error(self, request: Request) -> Response:
        """Always fails; registered outside production to exercise the 500 page."""
        msg = "test error"
        raise RuntimeError(msg)


async def read_version_documents(directory: Path) -> dict[str, str]:
    """Read ``prompts.yml``, ``order.md`` and ``terms.md`` concurrently.

    The prompts file is parsed (plain YAML data only) and re-dumped for
    display, so a malformed file fails here rather than rendering garbage.
    """
    base = anyio.Path(directory)
    results: dict[str, str] = {}

    async def read(key: str, filename: str) -> None:
        results[key] = await (base / filename).read_text(encoding="utf-8")

    async with anyio.create_task_group() as tg:
        tg.start_soon(read, "prompts", "prompts.yml")
        tg.start_soon(read, "order", "order.md")
        tg.start_soon(read, "terms", "terms.md")

    prompts = yaml.safe_load(results["prompts"])
    results["prompts"] = yaml.safe_dump(prompts, sort_keys=False, allow_unicode=True).strip()
    return results
