"""Kida environment setup, template filters, and the Template return type.

The environment is created once when the site freezes and passed through
the request pipeline. Handlers return ``Template(...)`` and the dispatcher
renders it.
"""

from datetime import date
from typing import Any

from kida import Environment, PackageLoader
from kida.template import Markup

from clickwrap.config import SiteConfig


class Template:
    """A full-page template render, returned by handlers.

    Usage::

        return Template("agree.html", agreement=content.agreement)
    """

    __slots__ = ("context", "name", "status")

    def __init__(self, name: str, /, *, status: int = 200, **context: Any) -> None:
        self.name = name
        self.status = status
        self.context = context

    def __repr__(self) -> str:
        return f"Template({self.name!r}, status={self.status})"


def format_date(value: str) -> str:
    """Format an ISO ``YYYY-MM-DD`` string as ``January 1, 2024``.

    Anything that isn't an ISO date is returned unchanged.
    """
    try:
        parsed = date.fromisoformat(str(value))
    except ValueError:
        return str(value)
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def html(value: str) -> Markup:
    """Mark already-rendered HTML (markdown output) as safe."""
    return Markup(value)


def create_environment(config: SiteConfig) -> Environment:
    """Create the kida Environment for the site's bundled templates.

    ``site`` (the ``SiteConfig``) is available to every template as a global.
    """
    env = Environment(
        loader=PackageLoader("clickwrap", "templates"),
        autoescape=True,
        auto_reload=not config.production,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.update_filters({"format_date": format_date, "html": html})
    env.add_global("site", config)
    return env


def render_template(env: Environment, tpl: Template) -> str:
    """Render a full template to string."""
    template = env.get_template(tpl.name)
    return template.render(tpl.context)
