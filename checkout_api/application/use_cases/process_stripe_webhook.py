from __future__ import annotations

import json
import logging

from checkout_api.application.dto.webhook import (
    CHECKOUT_SESSION_COMPLETED,
    CheckoutCompletedEvent,
    StripeWebhookInput,
    StripeWebhookOutput,
)
from checkout_api.application.ports.checkout_completed_port import CheckoutCompletedPort
from checkout_api.application.ports.webhook_verifier_port import WebhookVerifierPort
from checkout_api.domain.exceptions import WebhookPayloadError


logger = logging.getLogger(__name__)


class ProcessStripeWebhookUseCase:
    def __init__(
        self,
        *,
        webhook_verifier: WebhookVerifierPort,
        checkout_completed_port: CheckoutCompletedPort,
    ):
        self._webhook_verifier = webhook_verifier
        self._checkout_completed_port = checkout_completed_port

    def execute(self, command: StripeWebhookInput) -> StripeWebhookOutput:
        # Nothing in the payload is read before the signature checks out.
        self._webhook_verifier.verify(payload=command.payload, header=command.signature)

        event = _parse_event(command.payload)
        event_id = _optional_str(event.get("id"))
        event_type = str(event.get("type") or "")

        if event_type == CHECKOUT_SESSION_COMPLETED:
            completed = _to_checkout_completed(event_id, event)
            if completed is None:
                logger.warning(
                    "process_stripe_webhook: missing_session event_id=%s event_type=%s",
                    event_id,
                    event_type,
                )
                return StripeWebhookOutput(event_id=event_id, event_type=event_type, handled=False)
            self._checkout_completed_port.handle(completed)
            return StripeWebhookOutput(event_id=event_id, event_type=event_type, handled=True)

        logger.info("process_stripe_webhook: ignored event_id=%s event_type=%s", event_id, event_type)
        return StripeWebhookOutput(event_id=event_id, event_type=event_type, handled=False)


def _parse_event(payload: bytes) -> dict:
    try:
        event = json.loads(payload)
    except ValueError as exc:
        raise WebhookPayloadError("Webhook payload is not valid JSON.") from exc
    if not isinstance(event, dict):
        raise WebhookPayloadError("Webhook payload must be a JSON object.")
    return event


def _to_checkout_completed(event_id: str | None, event: dict) -> CheckoutCompletedEvent | None:
    data = event.get("data")
    session = data.get("object") if isinstance(data, dict) else None
    if not isinstance(session, dict):
        return None

    metadata = session.get("metadata") if isinstance(session.get("metadata"), dict) else {}
    details = session.get("customer_details") if isinstance(session.get("customer_details"), dict) else {}
    return CheckoutCompletedEvent(
        event_id=event_id,
        checkout_session_id=_optional_str(session.get("id")),
        onboarding_session_id=_optional_str(
            session.get("client_reference_id") or metadata.get("onboarding_session_id")
        ),
        customer_id=_optional_str(session.get("customer")),
        customer_email=_optional_str(details.get("email") or session.get("customer_email")),
        subscription_id=_optional_str(session.get("subscription")),
        plan=_optional_str(metadata.get("plan")),
        business_name=_optional_str(metadata.get("business_name")),
    )


def _optional_str(value) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
