"""Inbound payment-provider webhooks."""

from clickwrap.webhooks.signature import SignatureVerifier, WebhookEvent

__all__ = ["SignatureVerifier", "WebhookEvent"]
