from __future__ import annotations

from typing import Protocol

from checkout_api.application.dto.checkout import CheckoutSessionRequest
from checkout_api.domain.entities.checkout_session import CheckoutSessionCreated, CheckoutSessionStatus


class PaymentGatewayPort(Protocol):
    def create_checkout_session(self, request: CheckoutSessionRequest) -> CheckoutSessionCreated:
        ...

    def get_checkout_session(self, *, session_id: str) -> CheckoutSessionStatus:
        ...
