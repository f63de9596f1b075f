from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CreateCheckoutSessionInput:
    plan: str | None
    onboarding_session_id: str | None
    base_url: str
    customer_email: str | None = None
    business_name: str | None = None


@dataclass(frozen=True)
class CreateCheckoutSessionOutput:
    checkout_session_id: str
    checkout_url: str


@dataclass(frozen=True)
class CheckoutSessionRequest:
    success_url: str
    cancel_url: str
    client_reference_id: str
    product_name: str
    unit_amount: int
    currency: str
    interval: str
    customer_email: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    mode: str = "subscription"

    def to_form_payload(self) -> dict:
        return {
            "mode": self.mode,
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
            "client_reference_id": self.client_reference_id,
            "customer_email": self.customer_email or None,
            "metadata": dict(self.metadata),
            "line_items": [
                {
                    "price_data": {
                        "currency": self.currency,
                        "product_data": {"name": self.product_name},
                        "unit_amount": self.unit_amount,
                        "recurring": {"interval": self.interval},
                    },
                    "quantity": 1,
                }
            ],
        }


@dataclass(frozen=True)
class GetCheckoutSessionInput:
    session_id: str | None


@dataclass(frozen=True)
class GetCheckoutSessionOutput:
    paid: bool
    status: str | None
    session_id: str | None
    customer_email: str | None


@dataclass(frozen=True)
class PlanOutput:
    key: str
    name: str
    amount_cents: int
    currency: str
    interval: str
