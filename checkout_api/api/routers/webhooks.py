from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from checkout_api.api.deps import get_process_stripe_webhook_use_case
from checkout_api.api.schemas.webhook import StripeWebhookResponse
from checkout_api.application.dto.webhook import StripeWebhookInput
from checkout_api.application.use_cases.process_stripe_webhook import ProcessStripeWebhookUseCase
from checkout_api.domain.exceptions import InvalidSignatureError, WebhookPayloadError


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/stripe-webhook", response_model=StripeWebhookResponse)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="Stripe-Signature"),
    use_case: ProcessStripeWebhookUseCase = Depends(get_process_stripe_webhook_use_case),
):
    # Signatures cover the exact bytes on the wire, so the body is read raw.
    payload = await request.body()
    try:
        output = use_case.execute(StripeWebhookInput(signature=stripe_signature, payload=payload))
    except InvalidSignatureError as exc:
        raise HTTPException(status_code=400, detail="Invalid Stripe signature") from exc
    except WebhookPayloadError as exc:
        logger.warning("stripe_webhook: payload_error error=%s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("stripe_webhook: processing_failed")
        raise HTTPException(status_code=500, detail="Webhook error") from exc

    logger.info(
        "stripe_webhook: received event_id=%s event_type=%s handled=%s",
        output.event_id,
        output.event_type,
        output.handled,
    )
    return StripeWebhookResponse(received=True)
