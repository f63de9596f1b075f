from __future__ import annotations

from typing import Protocol

from checkout_api.domain.services.webhook_signature import SignatureHeader


class WebhookVerifierPort(Protocol):
    def verify(self, *, payload: bytes, header: str | None) -> SignatureHeader:
        ...
