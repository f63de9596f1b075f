from __future__ import annotations

from fastapi import HTTPException, Request

from checkout_api.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from checkout_api.application.use_cases.get_checkout_session import GetCheckoutSessionUseCase
from checkout_api.application.use_cases.list_plans import ListPlansUseCase
from checkout_api.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from checkout_api.infrastructure.clients.stripe_client import StripeClient, StripeClientSettings
from checkout_api.infrastructure.clients.stripe_webhook_verifier import StripeWebhookVerifier
from checkout_api.infrastructure.handlers.logging_checkout_completed_handler import (
    LoggingCheckoutCompletedHandler,
)
from checkout_api.shared.config import get_settings


def _get_stripe_client() -> StripeClient:
    # A missing key is reported by the client on first call, inside the route's error mapping.
    settings = get_settings()
    return StripeClient(
        StripeClientSettings(
            secret_key=settings.stripe_secret_key,
            api_base=settings.stripe_api_base,
            timeout_seconds=settings.stripe_timeout_seconds,
        )
    )


def _get_webhook_verifier() -> StripeWebhookVerifier:
    settings = get_settings()
    if not settings.stripe_webhook_secret:
        raise HTTPException(status_code=500, detail="STRIPE_WEBHOOK_SECRET is required.")
    return StripeWebhookVerifier(
        secret=settings.stripe_webhook_secret,
        tolerance_seconds=settings.stripe_webhook_tolerance_seconds,
    )


def _first_header_value(value: str | None) -> str | None:
    if not value:
        return None
    first = value.split(",")[0].strip()
    return first or None


def get_base_url(request: Request) -> str:
    settings = get_settings()
    if settings.app_base_url:
        return settings.app_base_url.rstrip("/")
    proto = _first_header_value(request.headers.get("x-forwarded-proto")) or "https"
    host = (
        _first_header_value(request.headers.get("x-forwarded-host"))
        or request.headers.get("host")
        or request.url.netloc
    )
    return f"{proto}://{host}"


def get_create_checkout_session_use_case() -> CreateCheckoutSessionUseCase:
    return CreateCheckoutSessionUseCase(payment_gateway_port=_get_stripe_client())


def get_get_checkout_session_use_case() -> GetCheckoutSessionUseCase:
    return GetCheckoutSessionUseCase(payment_gateway_port=_get_stripe_client())


def get_list_plans_use_case() -> ListPlansUseCase:
    return ListPlansUseCase()


def get_process_stripe_webhook_use_case() -> ProcessStripeWebhookUseCase:
    return ProcessStripeWebhookUseCase(
        webhook_verifier=_get_webhook_verifier(),
        checkout_completed_port=LoggingCheckoutCompletedHandler(),
    )
