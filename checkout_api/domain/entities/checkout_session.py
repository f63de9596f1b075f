from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutSessionCreated:
    id: str
    url: str


@dataclass(frozen=True)
class CheckoutSessionStatus:
    id: str | None
    payment_status: str | None
    status: str | None
    customer_email: str | None

    @property
    def paid(self) -> bool:
        # Open sessions report payment_status, completed ones may only carry status.
        return self.payment_status == "paid" or self.status == "complete"

    @property
    def display_status(self) -> str | None:
        return self.payment_status or self.status
