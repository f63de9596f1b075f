from __future__ import annotations

from dataclasses import dataclass


CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


@dataclass(frozen=True)
class StripeWebhookInput:
    signature: str | None
    payload: bytes


@dataclass(frozen=True)
class StripeWebhookOutput:
    event_id: str | None
    event_type: str
    handled: bool


@dataclass(frozen=True)
class CheckoutCompletedEvent:
    event_id: str | None
    checkout_session_id: str | None
    onboarding_session_id: str | None
    customer_id: str | None
    customer_email: str | None
    subscription_id: str | None
    plan: str | None
    business_name: str | None
