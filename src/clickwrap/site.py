"""Assemble the clickwrap site: content, gate, views and the route table.

Everything the site reads from disk is loaded here, once, before the
first request. A missing agreement or bad configuration fails startup
rather than a request.
"""

import logging

from clickwrap.app import Site
from clickwrap.config import SiteConfig
from clickwrap.content import SiteContent, load_site_content
from clickwrap.security.gate import AgreementGate
from clickwrap.views import AgreeView, Pages, StaticFile, WebhookView
from clickwrap.webhooks.signature import SignatureVerifier

logger = logging.getLogger("clickwrap.server")


def create_site(config: SiteConfig | None = None, content: SiteContent | None = None) -> Site:
    """Build a ready-to-serve Site.

    Args:
        config: Site configuration; read from the environment when omitted.
        content: Pre-loaded content; read from ``config.directory`` when omitted.
    """
    config = config or SiteConfig.from_env()
    content = content or load_site_content(config)

    site = Site(config)
    gate = AgreementGate(config, content.agreement)
    pages = Pages(config, content, site.kida_env)
    agree = AgreeView(config, content, gate, site.kida_env)
    webhook = WebhookView(
        SignatureVerifier(config.stripe_webhook_secret, tolerance=config.webhook_tolerance),
        limit=config.max_webhook_body,
    )

    site.add_route("/", pages.home, name="home")
    site.add_route("/agree", agree, methods=["GET", "POST"], name="agree")
    site.add_route("/pay", pages.pay, name="pay")
    site.add_route("/privacy", pages.privacy, name="privacy")
    site.add_route(
        "/versions/{version}",
        gate.require_agreement(pages.version),
        name="version",
    )
    site.add_route("/stripe-webhook", webhook, methods=["POST"], name="stripe-webhook")

    if not config.production:
        site.add_route("/internal-error", pages.internal_error, name="internal-error")

    for filename in config.static_files:
        site.add_route(f"/{filename}", StaticFile(config.static_dir / filename), name=filename)

    if not config.stripe_webhook_secret:
        logger.warning("STRIPE_WEBHOOK_SECRET is not set; every webhook will be rejected")

    return site
