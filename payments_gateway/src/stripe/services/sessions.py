import logging

from ..client import get_stripe
from ..config import get_settings
from ..audit import log

logger = logging.getLogger(__name__)

# Stripe client and settings (tests may monkeypatch these module attributes)
stripe = get_stripe()
settings = get_settings()


class MissingCustomerError(ValueError):
    """The checkout session is not attached to a Stripe customer yet."""


def retrieve_checkout_session(session_id: str):
    """Fetch the Checkout Session so the success page can show the raw result."""
    try:
        return stripe.checkout.Session.retrieve(session_id)
    except Exception as e:
        logger.error("Checkout session %s retrieval failed: %s", session_id, e)
        raise


def create_checkout_session(*, price_id: str):
    # Other optional params include billing_address_collection, customer and
    # customer_email; see https://stripe.com/docs/api/checkout/sessions/create
    try:
        session = stripe.checkout.Session.create(
            mode="subscription",
            payment_method_types=["card"],
            line_items=[{"price": price_id, "quantity": 1}],
            success_url=settings.checkout_success_url,
            cancel_url=settings.checkout_cancel_url,
        )
    except Exception as e:
        logger.error("Checkout session creation failed for price %s: %s", price_id, e)
        log("checkout_session_create", {"price_id": price_id}, "error", str(e))
        raise
    log("checkout_session_create", {"price_id": price_id, "session_id": session["id"]})
    return session


def create_portal_session(*, session_id: str):
    """Open a Customer-Portal session for the customer behind a checkout session.

    The customer returns to ``PORTAL_RETURN_URL`` once done managing billing.
    """
    checkout_session = retrieve_checkout_session(session_id)
    customer = checkout_session["customer"]
    if not customer:
        raise MissingCustomerError(f"Checkout session {session_id} has no customer")
    # customer may be expanded into an object
    customer_id = customer if isinstance(customer, str) else customer["id"]

    try:
        portal_session = stripe.billing_portal.Session.create(
            customer=customer_id,
            return_url=settings.portal_return_url,
        )
    except Exception as e:
        logger.error("Portal session creation failed for customer %s: %s", customer_id, e)
        log("portal_session_create", {"session_id": session_id, "customer_id": customer_id}, "error", str(e))
        raise
    log("portal_session_create", {"session_id": session_id, "customer_id": customer_id})
    return portal_session
