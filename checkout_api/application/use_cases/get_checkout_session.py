from __future__ import annotations

from checkout_api.application.dto.checkout import GetCheckoutSessionInput, GetCheckoutSessionOutput
from checkout_api.application.ports.payment_gateway_port import PaymentGatewayPort
from checkout_api.domain.exceptions import CheckoutInputError


class GetCheckoutSessionUseCase:
    def __init__(self, *, payment_gateway_port: PaymentGatewayPort):
        self._payment_gateway_port = payment_gateway_port

    def execute(self, command: GetCheckoutSessionInput) -> GetCheckoutSessionOutput:
        if not command.session_id:
            raise CheckoutInputError("Missing session_id")

        session = self._payment_gateway_port.get_checkout_session(session_id=command.session_id)
        return GetCheckoutSessionOutput(
            paid=session.paid,
            status=session.display_status,
            session_id=session.id,
            customer_email=session.customer_email,
        )
