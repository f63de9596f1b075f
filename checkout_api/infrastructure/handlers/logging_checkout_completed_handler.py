from __future__ import annotations

import logging

from checkout_api.application.dto.webhook import CheckoutCompletedEvent
from checkout_api.application.ports.checkout_completed_port import CheckoutCompletedPort


logger = logging.getLogger(__name__)


class LoggingCheckoutCompletedHandler(CheckoutCompletedPort):
    """Records completed checkouts in the log until tenant provisioning is wired."""

    def handle(self, event: CheckoutCompletedEvent) -> None:
        logger.info(
            "checkout_completed: event_id=%s checkout_session_id=%s onboarding_session_id=%s "
            "customer_id=%s subscription_id=%s plan=%s",
            event.event_id,
            event.checkout_session_id,
            event.onboarding_session_id,
            event.customer_id,
            event.subscription_id,
            event.plan,
        )
