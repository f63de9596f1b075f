from __future__ import annotations

import logging

from checkout_api.application.dto.checkout import (
    CheckoutSessionRequest,
    CreateCheckoutSessionInput,
    CreateCheckoutSessionOutput,
)
from checkout_api.application.ports.payment_gateway_port import PaymentGatewayPort
from checkout_api.domain.entities.plan import ENTERPRISE_PLAN_KEY, get_plan
from checkout_api.domain.exceptions import CheckoutInputError


logger = logging.getLogger(__name__)

# Stripe substitutes this placeholder after checkout; it must reach Stripe verbatim.
CHECKOUT_SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"
SUCCESS_PATH = "/onboarding/success?session_id=" + CHECKOUT_SESSION_ID_PLACEHOLDER
CANCEL_PATH = "/pricing"


class CreateCheckoutSessionUseCase:
    def __init__(self, *, payment_gateway_port: PaymentGatewayPort):
        self._payment_gateway_port = payment_gateway_port

    def execute(self, command: CreateCheckoutSessionInput) -> CreateCheckoutSessionOutput:
        if not command.plan or not command.onboarding_session_id:
            raise CheckoutInputError("Missing required fields: plan, sessionId")
        if command.plan == ENTERPRISE_PLAN_KEY:
            raise CheckoutInputError("Enterprise plan uses demo booking, not Stripe checkout.")

        plan = get_plan(command.plan)
        if plan is None:
            raise CheckoutInputError("Invalid plan")

        base_url = command.base_url.rstrip("/")
        request = CheckoutSessionRequest(
            success_url=f"{base_url}{SUCCESS_PATH}",
            cancel_url=f"{base_url}{CANCEL_PATH}",
            client_reference_id=command.onboarding_session_id,
            customer_email=command.customer_email or None,
            product_name=plan.name,
            unit_amount=plan.amount_cents,
            currency=plan.currency,
            interval=plan.interval,
            metadata={
                "onboarding_session_id": command.onboarding_session_id,
                "plan": plan.key,
                "business_name": command.business_name or "",
            },
        )
        session = self._payment_gateway_port.create_checkout_session(request)

        logger.info(
            "create_checkout_session: created checkout_session_id=%s plan=%s onboarding_session_id=%s",
            session.id,
            plan.key,
            command.onboarding_session_id,
        )
        return CreateCheckoutSessionOutput(
            checkout_session_id=session.id,
            checkout_url=session.url,
        )
