"""Billing webhook event dispatch.

Review the important events for Billing webhooks at
https://stripe.com/docs/billing/webhooks. The handlers below only record that
the event arrived; they keep no state of their own.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping

from ..audit import log

logger = logging.getLogger(__name__)

Handler = Callable[[Mapping[str, Any]], Awaitable[None]]


def _field(obj: Mapping[str, Any], key: str):
    return obj[key] if key in obj else None


def _data_object(event: Mapping[str, Any]) -> Mapping[str, Any]:
    data = _field(event, "data") or {}
    return _field(data, "object") or {}


def _note(event: Mapping[str, Any]):
    obj = _data_object(event)
    logger.debug("Stripe event %s (%s) for object %s", _field(event, "type"), _field(event, "id"), _field(obj, "id"))


async def handle_customer_created(event):
    _note(event)


async def handle_customer_updated(event):
    _note(event)


async def handle_invoice_upcoming(event):
    _note(event)


async def handle_invoice_created(event):
    _note(event)


async def handle_invoice_finalized(event):
    _note(event)


async def handle_invoice_payment_succeeded(event):
    _note(event)


async def handle_invoice_payment_failed(event):
    obj = _data_object(event)
    logger.warning("Invoice %s payment failed for customer %s", _field(obj, "id"), _field(obj, "customer"))


async def handle_subscription_created(event):
    _note(event)


HANDLERS: Dict[str, Handler] = {
    "customer.created": handle_customer_created,
    "customer.updated": handle_customer_updated,
    "invoice.upcoming": handle_invoice_upcoming,
    "invoice.created": handle_invoice_created,
    "invoice.finalized": handle_invoice_finalized,
    "invoice.payment_succeeded": handle_invoice_payment_succeeded,
    "invoice.payment_failed": handle_invoice_payment_failed,
    "customer.subscription.created": handle_subscription_created,
}


async def dispatch(event: Mapping[str, Any]) -> bool:
    """Route a verified event to its handler.

    Returns False when the event type is not one we handle; the caller answers
    those with 400 so Stripe surfaces the misconfigured endpoint.
    """
    event_type = _field(event, "type")
    handler = HANDLERS.get(event_type)
    if handler is None:
        log("webhook_unhandled", {"type": event_type, "event_id": _field(event, "id")}, "ignored")
        return False
    try:
        await handler(event)
    except Exception as e:
        log("webhook_process", {"type": event_type, "event_id": _field(event, "id")}, "error", str(e))
        raise
    log("webhook_process", {"type": event_type, "event_id": _field(event, "id")})
    return True
