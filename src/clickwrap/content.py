"""Process-wide site content, loaded once at startup.

``SiteContent`` is frozen and handed by reference to every component that
needs it. Nothing writes to it after ``load_site_content()`` returns, so
request tasks can read it without locking.
"""

import logging
from dataclasses import dataclass

from clickwrap.agreement import AgreementRecord, load_agreement
from clickwrap.config import SiteConfig
from clickwrap.errors import ConfigurationError
from clickwrap.markdown import MarkdownRenderer
from clickwrap.versions import latest_release, list_versions

logger = logging.getLogger("clickwrap.content")


@dataclass(frozen=True, slots=True)
class SiteContent:
    """Everything the site reads from disk before serving."""

    agreement: AgreementRecord
    agreement_html: str
    about_html: str
    versions: tuple[str, ...]
    latest_version: str | None


def load_site_content(
    config: SiteConfig,
    renderer: MarkdownRenderer | None = None,
) -> SiteContent:
    """Read ``agreement.md``, ``about.md`` and the version list.

    Raises ``ConfigurationError`` if the agreement or about document is
    missing or invalid.
    """
    renderer = renderer or MarkdownRenderer()
    agreement = load_agreement(config.root / "agreement.md")

    about_path = config.root / "about.md"
    try:
        about = about_path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read about document {about_path}: {exc}"
        raise ConfigurationError(msg) from exc

    versions = list_versions(config.versions_dir)
    latest = latest_release(versions)
    logger.info(
        "loaded agreement %s, %d version(s), latest release %s",
        agreement.version,
        len(versions),
        latest,
    )
    return SiteContent(
        agreement=agreement,
        agreement_html=renderer.render(agreement.body),
        about_html=renderer.render(about),
        versions=versions,
        latest_version=latest,
    )
