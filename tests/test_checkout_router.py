from __future__ import annotations

from urllib.parse import parse_qsl

from fastapi.testclient import TestClient
import httpx
import pytest

from checkout_api.api.deps import (
    get_create_checkout_session_use_case,
    get_get_checkout_session_use_case,
)
from checkout_api.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from checkout_api.application.use_cases.get_checkout_session import GetCheckoutSessionUseCase
from checkout_api.domain.entities.checkout_session import CheckoutSessionCreated, CheckoutSessionStatus
from checkout_api.domain.entities.plan import PLAN_CATALOG
from checkout_api.domain.exceptions import PaymentProviderError
from checkout_api.infrastructure.clients.stripe_client import StripeClient, StripeClientSettings
from checkout_api.main import app


class FakePaymentGatewayPort:
    def __init__(self, *, error: Exception | None = None, status: CheckoutSessionStatus | None = None):
        self._error = error
        self._status = status
        self.requests = []

    def create_checkout_session(self, request) -> CheckoutSessionCreated:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return CheckoutSessionCreated(id="cs_abc", url="https://pay.example/cs_abc")

    def get_checkout_session(self, *, session_id: str) -> CheckoutSessionStatus:
        if self._error is not None:
            raise self._error
        return self._status


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("APP_BASE_URL", raising=False)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_gateway(gateway) -> None:
    app.dependency_overrides[get_create_checkout_session_use_case] = lambda: CreateCheckoutSessionUseCase(
        payment_gateway_port=gateway
    )
    app.dependency_overrides[get_get_checkout_session_use_case] = lambda: GetCheckoutSessionUseCase(
        payment_gateway_port=gateway
    )


@pytest.mark.parametrize("plan", sorted(PLAN_CATALOG))
def test_create_checkout_session_returns_checkout_url_for_catalog_plans(client: TestClient, plan: str):
    _use_gateway(FakePaymentGatewayPort())

    response = client.post("/create-checkout-session", json={"plan": plan, "sessionId": "ob_123"})

    assert response.status_code == 200
    assert response.json() == {"checkoutUrl": "https://pay.example/cs_abc", "sessionId": "cs_abc"}


def test_create_checkout_session_rejects_enterprise(client: TestClient):
    gateway = FakePaymentGatewayPort()
    _use_gateway(gateway)

    response = client.post(
        "/create-checkout-session",
        json={
            "plan": "enterprise",
            "sessionId": "ob_123",
            "customerEmail": "cto@carrier.example",
            "businessName": "Carrier",
        },
    )

    assert response.status_code == 400
    assert "demo booking" in response.json()["error"]
    assert gateway.requests == []


@pytest.mark.parametrize(
    "body",
    [{"sessionId": "ob_123"}, {"plan": "growth"}, {}],
)
def test_create_checkout_session_requires_plan_and_session(client: TestClient, body: dict):
    _use_gateway(FakePaymentGatewayPort())

    response = client.post("/create-checkout-session", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: plan, sessionId"}


@pytest.mark.parametrize("headers", [{}, {"Content-Type": "application/json"}])
def test_create_checkout_session_empty_body_reports_missing_fields(client: TestClient, headers: dict):
    _use_gateway(FakePaymentGatewayPort())

    response = client.post("/create-checkout-session", content=b"", headers=headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: plan, sessionId"}


def test_create_checkout_session_rejects_unknown_plan(client: TestClient):
    _use_gateway(FakePaymentGatewayPort())

    response = client.post("/create-checkout-session", json={"plan": "elite", "sessionId": "ob_123"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid plan"}


def test_create_checkout_session_rejects_get(client: TestClient):
    response = client.get("/create-checkout-session")

    assert response.status_code == 405
    assert "error" in response.json()


def test_create_checkout_session_rejects_malformed_json(client: TestClient):
    _use_gateway(FakePaymentGatewayPort())

    response = client.post(
        "/create-checkout-session",
        content=b"{plan:",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_create_checkout_session_propagates_provider_status_with_hint(client: TestClient):
    _use_gateway(FakePaymentGatewayPort(error=PaymentProviderError("Invalid API Key provided", status_code=401)))

    response = client.post("/create-checkout-session", json={"plan": "starter", "sessionId": "ob_123"})

    assert response.status_code == 401
    payload = response.json()
    assert payload["error"] == "Invalid API Key provided"
    assert "STRIPE_SECRET_KEY" in payload["hint"]


def test_create_checkout_session_without_secret_key_is_configuration_error(
    client: TestClient,
    monkeypatch: pytest.MonkeyPatch,
):
    monkeypatch.setenv("STRIPE_SECRET_KEY", "")

    response = client.post("/create-checkout-session", json={"plan": "starter", "sessionId": "ob_123"})

    assert response.status_code == 500
    assert "STRIPE_SECRET_KEY" in response.json()["error"]
    assert "hint" in response.json()


def test_end_to_end_growth_checkout_against_stub_provider(client: TestClient):
    captured: dict = {}

    def stub_provider(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["form"] = dict(parse_qsl(request.content.decode()))
        return httpx.Response(200, json={"id": "cs_abc", "url": "https://pay.example/cs_abc"})

    stripe_client = StripeClient(
        StripeClientSettings(secret_key="sk_test_123"),
        transport=httpx.MockTransport(stub_provider),
    )
    _use_gateway(stripe_client)

    response = client.post(
        "/create-checkout-session",
        json={"plan": "growth", "sessionId": "ob_123"},
        headers={"X-Forwarded-Proto": "https", "X-Forwarded-Host": "app.neurosphere.example"},
    )

    assert response.status_code == 200
    assert response.json() == {"checkoutUrl": "https://pay.example/cs_abc", "sessionId": "cs_abc"}
    assert captured["path"] == "/v1/checkout/sessions"
    form = captured["form"]
    assert form["client_reference_id"] == "ob_123"
    assert form["success_url"] == (
        "https://app.neurosphere.example/onboarding/success?session_id={CHECKOUT_SESSION_ID}"
    )
    assert form["cancel_url"] == "https://app.neurosphere.example/pricing"
    assert form["line_items[0][price_data][unit_amount]"] == "149900"
    assert form["line_items[0][price_data][product_data][name]"] == "NeuroSphere Growth"
    assert form["metadata[onboarding_session_id]"] == "ob_123"


def test_base_url_falls_back_to_https_and_host_header(client: TestClient):
    gateway = FakePaymentGatewayPort()
    _use_gateway(gateway)

    client.post("/create-checkout-session", json={"plan": "starter", "sessionId": "ob_123"})

    assert gateway.requests[0].cancel_url == "https://testserver/pricing"


def test_base_url_prefers_configured_app_base_url(client: TestClient, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("APP_BASE_URL", "https://neurosphere.example/")
    gateway = FakePaymentGatewayPort()
    _use_gateway(gateway)

    client.post(
        "/api/create-checkout-session",
        json={"plan": "starter", "sessionId": "ob_123"},
        headers={"X-Forwarded-Host": "ignored.example"},
    )

    assert gateway.requests[0].cancel_url == "https://neurosphere.example/pricing"


@pytest.mark.parametrize(
    ("session", "expected"),
    [
        (
            CheckoutSessionStatus(id="cs_1", payment_status="paid", status="complete", customer_email="a@b.example"),
            {"paid": True, "status": "paid", "sessionId": "cs_1", "customerEmail": "a@b.example"},
        ),
        (
            CheckoutSessionStatus(id="cs_1", payment_status=None, status="complete", customer_email=None),
            {"paid": True, "status": "complete", "sessionId": "cs_1"},
        ),
        (
            CheckoutSessionStatus(id="cs_1", payment_status="unpaid", status="open", customer_email=None),
            {"paid": False, "status": "unpaid", "sessionId": "cs_1"},
        ),
    ],
)
def test_checkout_session_reports_paid(client: TestClient, session, expected):
    _use_gateway(FakePaymentGatewayPort(status=session))

    response = client.get("/checkout-session", params={"session_id": "cs_1"})

    assert response.status_code == 200
    assert response.json() == expected


def test_checkout_session_requires_session_id(client: TestClient):
    _use_gateway(FakePaymentGatewayPort())

    response = client.get("/checkout-session")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing session_id"}


def test_checkout_session_propagates_provider_error(client: TestClient):
    _use_gateway(FakePaymentGatewayPort(error=PaymentProviderError("No such checkout.session", status_code=404)))

    response = client.get("/api/checkout-session", params={"session_id": "cs_missing"})

    assert response.status_code == 404
    assert response.json() == {"error": "No such checkout.session"}


def test_checkout_session_defaults_to_500_without_provider_status(client: TestClient):
    _use_gateway(FakePaymentGatewayPort(error=PaymentProviderError("Stripe request failed: timeout")))

    response = client.get("/checkout-session", params={"session_id": "cs_1"})

    assert response.status_code == 500


def test_plans_lists_self_serve_catalog(client: TestClient):
    response = client.get("/plans")

    assert response.status_code == 200
    payload = response.json()
    assert [plan["key"] for plan in payload] == ["starter", "growth"]
    assert payload[1] == {
        "key": "growth",
        "name": "NeuroSphere Growth",
        "amountCents": 149900,
        "currency": "usd",
        "interval": "month",
    }
    assert all(plan["key"] != "enterprise" for plan in payload)
