"""Stripe webhook signature verification.

Stripe signs the exact bytes it sends: ``Stripe-Signature: t=<ts>,v1=<hex>``
where ``v1`` is HMAC-SHA256 over ``"<ts>." + body`` with the endpoint
secret. Verification therefore has to see the raw body. Parsing the JSON
and re-serializing it changes the bytes and breaks the signature, so
``verify()`` only accepts a ``RawBody`` from the bounded reader.
"""

import json
from dataclasses import dataclass
from typing import Any

import stripe

from clickwrap.errors import InvalidSignature
from clickwrap.http.body import RawBody

DEFAULT_TOLERANCE = 300  # seconds


@dataclass(frozen=True, slots=True)
class WebhookEvent:
    """A verified webhook event. Exists for one request, never persisted."""

    id: str
    type: str
    payload: dict[str, Any]
    raw: RawBody


class SignatureVerifier:
    """Checks webhook bodies against the shared endpoint secret.

    Args:
        secret: The endpoint's signing secret (``whsec_...``).
        tolerance: Maximum age of the signed timestamp, in seconds.
    """

    __slots__ = ("_secret", "_tolerance")

    def __init__(self, secret: str, *, tolerance: int = DEFAULT_TOLERANCE) -> None:
        self._secret = secret
        self._tolerance = tolerance

    def verify(self, raw: RawBody, signature_header: str | None) -> WebhookEvent:
        """Verify *raw* against *signature_header* and return the event.

        Raises:
            TypeError: If *raw* is not a ``RawBody`` (parsed or re-encoded
                bodies can't be verified).
            InvalidSignature: If the header is missing or malformed, the
                signature doesn't match, the timestamp is outside the
                tolerance, or the verified payload isn't a JSON event.
        """
        if not isinstance(raw, RawBody):
            msg = (
                f"verify() needs the RawBody received on the wire, got {type(raw).__name__}. "
                "Re-serialized payloads cannot match the signature."
            )
            raise TypeError(msg)
        if not signature_header:
            raise InvalidSignature("Missing Stripe-Signature header")
        if not self._secret:
            raise InvalidSignature("No webhook secret configured")

        try:
            payload_text = raw.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidSignature(f"Webhook body is not UTF-8: {exc}") from exc

        try:
            stripe.WebhookSignature.verify_header(
                payload_text,
                signature_header,
                self._secret,
                tolerance=self._tolerance,
            )
        except stripe.SignatureVerificationError as exc:
            raise InvalidSignature(f"Signature verification failed: {exc}") from exc

        # The signature covers these exact bytes; parse them once, after it checks out
        try:
            payload = json.loads(payload_text)
        except ValueError as exc:
            raise InvalidSignature(f"Signed payload is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise InvalidSignature("Signed payload is not a JSON object")

        event_id = payload.get("id")
        event_type = payload.get("type")
        if not isinstance(event_id, str) or not isinstance(event_type, str):
            raise InvalidSignature("Signed payload is missing event id or type")

        return WebhookEvent(id=event_id, type=event_type, payload=payload, raw=raw)
