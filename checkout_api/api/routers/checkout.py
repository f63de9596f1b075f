from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from checkout_api.api.deps import (
    get_base_url,
    get_create_checkout_session_use_case,
    get_get_checkout_session_use_case,
    get_list_plans_use_case,
)
from checkout_api.api.schemas.checkout import (
    CheckoutSessionResponse,
    CreateCheckoutSessionRequest,
    CreateCheckoutSessionResponse,
    PlanResponse,
)
from checkout_api.application.dto.checkout import CreateCheckoutSessionInput, GetCheckoutSessionInput
from checkout_api.application.use_cases.create_checkout_session import CreateCheckoutSessionUseCase
from checkout_api.application.use_cases.get_checkout_session import GetCheckoutSessionUseCase
from checkout_api.application.use_cases.list_plans import ListPlansUseCase
from checkout_api.domain.exceptions import CheckoutInputError, ConfigurationError, PaymentProviderError


router = APIRouter()

CHECKOUT_HINT = (
    "If this fails in production, set STRIPE_SECRET_KEY in the deployment environment. "
    "(Stripe test keys work fine.)"
)


def _provider_status(exc: Exception) -> int:
    return getattr(exc, "status_code", None) or 500


@router.post("/create-checkout-session", response_model=CreateCheckoutSessionResponse)
def create_checkout_session(
    req: CreateCheckoutSessionRequest = Body(default_factory=CreateCheckoutSessionRequest),
    base_url: str = Depends(get_base_url),
    use_case: CreateCheckoutSessionUseCase = Depends(get_create_checkout_session_use_case),
):
    try:
        output = use_case.execute(
            CreateCheckoutSessionInput(
                plan=req.plan,
                onboarding_session_id=req.session_id,
                base_url=base_url,
                customer_email=req.customer_email,
                business_name=req.business_name,
            )
        )
    except CheckoutInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (PaymentProviderError, ConfigurationError) as exc:
        raise HTTPException(
            status_code=_provider_status(exc),
            detail={
                "error": str(exc) or "Failed to create checkout session",
                "hint": CHECKOUT_HINT,
            },
        ) from exc

    return CreateCheckoutSessionResponse(
        checkout_url=output.checkout_url,
        session_id=output.checkout_session_id,
    )


@router.get(
    "/checkout-session",
    response_model=CheckoutSessionResponse,
    response_model_exclude_none=True,
)
def get_checkout_session(
    session_id: str | None = Query(default=None),
    use_case: GetCheckoutSessionUseCase = Depends(get_get_checkout_session_use_case),
):
    try:
        output = use_case.execute(GetCheckoutSessionInput(session_id=session_id))
    except CheckoutInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (PaymentProviderError, ConfigurationError) as exc:
        raise HTTPException(
            status_code=_provider_status(exc),
            detail=str(exc) or "Failed to fetch session",
        ) from exc

    return CheckoutSessionResponse(
        paid=output.paid,
        status=output.status,
        session_id=output.session_id,
        customer_email=output.customer_email,
    )


@router.get("/plans", response_model=list[PlanResponse])
def list_plans(use_case: ListPlansUseCase = Depends(get_list_plans_use_case)):
    return [
        PlanResponse(
            key=plan.key,
            name=plan.name,
            amount_cents=plan.amount_cents,
            currency=plan.currency,
            interval=plan.interval,
        )
        for plan in use_case.execute()
    ]
