from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreateCheckoutSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan: str | None = None
    session_id: str | None = Field(default=None, alias="sessionId")
    customer_email: str | None = Field(default=None, alias="customerEmail")
    business_name: str | None = Field(default=None, alias="businessName")


class CreateCheckoutSessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    checkout_url: str = Field(alias="checkoutUrl")
    session_id: str = Field(alias="sessionId")


class CheckoutSessionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    paid: bool
    status: str | None = None
    session_id: str | None = Field(default=None, alias="sessionId")
    customer_email: str | None = Field(default=None, alias="customerEmail")


class PlanResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    key: str
    name: str
    amount_cents: int = Field(alias="amountCents")
    currency: str
    interval: str
