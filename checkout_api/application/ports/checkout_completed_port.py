from __future__ import annotations

from typing import Protocol

from checkout_api.application.dto.webhook import CheckoutCompletedEvent


class CheckoutCompletedPort(Protocol):
    """Receives verified completed checkouts.

    Stripe redelivers events on any non-2xx answer and may deliver the same event
    more than once, so implementations must be idempotent on ``event_id``.
    """

    def handle(self, event: CheckoutCompletedEvent) -> None:
        ...
