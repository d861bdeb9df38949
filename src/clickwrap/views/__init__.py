"""Request handlers for the site's fixed route table."""

from clickwrap.views.agree import AgreeView
from clickwrap.views.pages import Pages, page
from clickwrap.views.static import StaticFile
from clickwrap.views.webhook import WebhookView

__all__ = ["AgreeView", "Pages", "StaticFile", "WebhookView", "page"]
