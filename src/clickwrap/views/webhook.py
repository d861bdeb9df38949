"""``POST /stripe-webhook`` — signed payment-provider events.

Read the bounded body, then verify it. Verification never starts before
the whole body is in hand, and nothing is retried. Every verified event
is logged with its id and type, whatever the outcome.
"""

import logging

from clickwrap.errors import InvalidSignature, PayloadTooLarge
from clickwrap.http.body import read_bounded
from clickwrap.http.request import Request
from clickwrap.http.response import Response, empty
from clickwrap.webhooks.signature import SignatureVerifier, WebhookEvent

logger = logging.getLogger("clickwrap.webhooks")

SIGNATURE_HEADER = "stripe-signature"


class WebhookView:
    """Handler for Stripe webhook deliveries."""

    __slots__ = ("_limit", "_verifier")

    def __init__(self, verifier: SignatureVerifier, *, limit: int) -> None:
        self._verifier = verifier
        self._limit = limit

    async def __call__(self, request: Request) -> Response:
        try:
            raw = await read_bounded(request, self._limit)
        except PayloadTooLarge as exc:
            logger.error("webhook body rejected (request %s): %s", request.request_id, exc)
            return empty(413)

        try:
            event = self._verifier.verify(raw, request.headers.get(SIGNATURE_HEADER))
        except InvalidSignature as exc:
            logger.warning("webhook rejected (request %s): %s", request.request_id, exc)
            return empty(400)

        logger.info(
            "Stripe webhook event id=%s type=%s (request %s)",
            event.id,
            event.type,
            request.request_id,
        )
        return self.handle_event(event)

    def handle_event(self, event: WebhookEvent) -> Response:
        """Decide what to do with a verified event.

        No event type is acted on yet, so every event is rejected.
        """
        return self.reject(event)

    def accept(self, event: WebhookEvent) -> Response:
        return empty(200)

    def reject(self, event: WebhookEvent) -> Response:
        logger.info("Stripe webhook event %s (%s) not handled", event.id, event.type)
        return empty(400)
