from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base for checkout domain errors."""


class ConfigurationError(DomainError):
    """Required credential or secret is not configured."""


class CheckoutInputError(DomainError):
    """Checkout request is missing fields or names an unsupported plan."""


class InvalidSignatureError(DomainError):
    """Webhook signature header is missing, malformed or does not match."""


class WebhookPayloadError(DomainError):
    """Verified webhook body could not be parsed or processed."""


class PaymentProviderError(DomainError):
    """Stripe answered with a non-success status or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None, data: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.data = data
