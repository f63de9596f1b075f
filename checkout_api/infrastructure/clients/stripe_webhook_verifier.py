from __future__ import annotations

import logging

import stripe

from checkout_api.application.ports.webhook_verifier_port import WebhookVerifierPort
from checkout_api.domain.exceptions import InvalidSignatureError
from checkout_api.domain.services.webhook_signature import SignatureHeader, parse_signature_header


logger = logging.getLogger(__name__)


class StripeWebhookVerifier(WebhookVerifierPort):
    def __init__(self, *, secret: str, tolerance_seconds: int | None = None):
        self._secret = secret
        self._tolerance_seconds = tolerance_seconds

    def verify(self, *, payload: bytes, header: str | None) -> SignatureHeader:
        parsed = parse_signature_header(header)
        if parsed is None:
            logger.info("stripe_webhook_verifier: rejected reason=malformed_header")
            raise InvalidSignatureError("Invalid Stripe signature")

        try:
            stripe.WebhookSignature.verify_header(
                payload.decode("utf-8"),
                parsed.normalized(),
                self._secret,
                tolerance=self._tolerance_seconds,
            )
        except (stripe.SignatureVerificationError, UnicodeDecodeError) as exc:
            logger.info("stripe_webhook_verifier: rejected reason=%s timestamp=%s", exc, parsed.timestamp)
            raise InvalidSignatureError("Invalid Stripe signature") from exc

        return parsed
