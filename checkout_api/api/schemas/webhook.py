from __future__ import annotations

from pydantic import BaseModel


class StripeWebhookResponse(BaseModel):
    received: bool
