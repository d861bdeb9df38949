"""Markdown rendering via patitas.

Used once at startup for the about page and the agreement body. Version
documents are shown as source, not rendered.
"""

from patitas import Markdown


class MarkdownRenderer:
    """Render Markdown source to HTML.

    Args:
        plugins: Patitas plugins to enable (default: all).
    """

    __slots__ = ("_md",)

    def __init__(self, *, plugins: list[str] | None = None) -> None:
        self._md = Markdown(plugins=plugins or ["all"], highlight=False)

    def render(self, source: str) -> str:
        """Render Markdown source to an HTML string."""
        if not source:
            return ""
        return self._md(source)
