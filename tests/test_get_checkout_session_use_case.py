from __future__ import annotations

import pytest

from checkout_api.application.dto.checkout import GetCheckoutSessionInput
from checkout_api.application.use_cases.get_checkout_session import GetCheckoutSessionUseCase
from checkout_api.domain.entities.checkout_session import CheckoutSessionStatus
from checkout_api.domain.exceptions import CheckoutInputError


class FakePaymentGatewayPort:
    def __init__(self, status: CheckoutSessionStatus):
        self._status = status
        self.requested: list[str] = []

    def create_checkout_session(self, request):
        raise AssertionError("not used")

    def get_checkout_session(self, *, session_id: str) -> CheckoutSessionStatus:
        self.requested.append(session_id)
        return self._status


def _status(**overrides) -> CheckoutSessionStatus:
    payload = {"id": "cs_1", "payment_status": None, "status": None, "customer_email": None}
    payload.update(overrides)
    return CheckoutSessionStatus(**payload)


@pytest.mark.parametrize(
    ("session", "expected_paid", "expected_status"),
    [
        (_status(payment_status="paid"), True, "paid"),
        (_status(status="complete"), True, "complete"),
        (_status(payment_status="unpaid"), False, "unpaid"),
        (_status(payment_status="unpaid", status="complete"), True, "unpaid"),
        (_status(payment_status="unpaid", status="open"), False, "unpaid"),
        (_status(status="expired"), False, "expired"),
    ],
)
def test_paid_checks_payment_status_or_completed_status(session, expected_paid, expected_status):
    gateway = FakePaymentGatewayPort(session)

    output = GetCheckoutSessionUseCase(payment_gateway_port=gateway).execute(
        GetCheckoutSessionInput(session_id="cs_1")
    )

    assert output.paid is expected_paid
    assert output.status == expected_status
    assert output.session_id == "cs_1"
    assert gateway.requested == ["cs_1"]


def test_customer_email_is_passed_through():
    gateway = FakePaymentGatewayPort(_status(payment_status="paid", customer_email="owner@agency.example"))

    output = GetCheckoutSessionUseCase(payment_gateway_port=gateway).execute(
        GetCheckoutSessionInput(session_id="cs_1")
    )

    assert output.customer_email == "owner@agency.example"


@pytest.mark.parametrize("session_id", [None, ""])
def test_missing_session_id_is_rejected(session_id):
    gateway = FakePaymentGatewayPort(_status())

    with pytest.raises(CheckoutInputError):
        GetCheckoutSessionUseCase(payment_gateway_port=gateway).execute(
            GetCheckoutSessionInput(session_id=session_id)
        )

    assert gateway.requested == []
