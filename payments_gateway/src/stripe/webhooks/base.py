import json
import logging

from fastapi import Request, HTTPException, status
from ..client import get_stripe
from ..config import get_settings

logger = logging.getLogger(__name__)

stripe = get_stripe()
settings = get_settings()


def signing_enabled() -> bool:
    return bool(settings.STRIPE_WEBHOOK_SECRET)


async def verify_stripe_signature(request: Request):
    """Build the Stripe event from the raw body, checking its signature."""
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    if not sig_header:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing Stripe-Signature header")
    try:
        event = stripe.Webhook.construct_event(
            payload=payload,
            sig_header=sig_header,
            secret=settings.STRIPE_WEBHOOK_SECRET,
        )
    except (ValueError, stripe.SignatureVerificationError) as e:
        logger.warning("Webhook signature verification failed: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid signature: {e}")
    return event


async def read_unsigned_event(request: Request) -> dict:
    """Without a signing secret the event data is taken from the body as-is."""
    payload = await request.body()
    try:
        event = json.loads(payload)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid payload: {e}")
    if not isinstance(event, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid payload: expected a JSON object")
    return event
