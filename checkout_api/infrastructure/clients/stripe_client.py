from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from checkout_api.application.dto.checkout import CheckoutSessionRequest
from checkout_api.application.ports.payment_gateway_port import PaymentGatewayPort
from checkout_api.domain.entities.checkout_session import CheckoutSessionCreated, CheckoutSessionStatus
from checkout_api.domain.exceptions import ConfigurationError, PaymentProviderError
from checkout_api.domain.services.form_encoding import form_encode


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StripeClientSettings:
    secret_key: str
    api_base: str = "https://api.stripe.com/v1"
    timeout_seconds: float = 10


class StripeClient(PaymentGatewayPort):
    def __init__(self, settings: StripeClientSettings, *, transport: httpx.BaseTransport | None = None):
        self._settings = settings
        self._transport = transport

    def create_checkout_session(self, request: CheckoutSessionRequest) -> CheckoutSessionCreated:
        payload = self.call("/checkout/sessions", "POST", request.to_form_payload())
        return _to_checkout_session_created(payload)

    def get_checkout_session(self, *, session_id: str) -> CheckoutSessionStatus:
        payload = self.call(f"/checkout/sessions/{quote(session_id, safe='')}", "GET")
        return _to_checkout_session_status(payload)

    def call(self, path: str, method: str, body: dict | None = None) -> Any:
        if not self._settings.secret_key:
            raise ConfigurationError("Missing STRIPE_SECRET_KEY environment variable.")

        url = f"{self._settings.api_base.rstrip('/')}{path}"
        headers = {"Authorization": f"Bearer {self._settings.secret_key}"}
        content = None
        if body:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            content = form_encode(body)

        try:
            with httpx.Client(timeout=self._settings.timeout_seconds, transport=self._transport) as client:
                response = client.request(method, url, headers=headers, content=content)
        except httpx.HTTPError as exc:
            logger.warning("stripe_client: request_failed method=%s path=%s error=%s", method, path, exc)
            raise PaymentProviderError(f"Stripe request failed: {exc}") from exc

        text = response.text
        try:
            data = json.loads(text)
        except ValueError:
            data = {"raw": text}

        if not response.is_success:
            message = _error_message(data) or f"Stripe error ({response.status_code})"
            logger.warning(
                "stripe_client: error_response method=%s path=%s status=%s message=%s",
                method,
                path,
                response.status_code,
                message,
            )
            raise PaymentProviderError(message, status_code=response.status_code, data=data)

        return data


def _error_message(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return str(message) if message else None


def _to_checkout_session_created(payload: Any) -> CheckoutSessionCreated:
    data = payload if isinstance(payload, dict) else {}
    session_id = data.get("id")
    session_url = data.get("url")
    if not session_id or not session_url:
        raise PaymentProviderError("Stripe checkout session response is incomplete.", data=payload)
    return CheckoutSessionCreated(id=str(session_id), url=str(session_url))


def _to_checkout_session_status(payload: Any) -> CheckoutSessionStatus:
    data = payload if isinstance(payload, dict) else {}
    details = data.get("customer_details") if isinstance(data.get("customer_details"), dict) else {}
    return CheckoutSessionStatus(
        id=_optional_str(data.get("id")),
        payment_status=_optional_str(data.get("payment_status")),
        status=_optional_str(data.get("status")),
        customer_email=_optional_str(details.get("email") or data.get("customer_email")),
    )


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
