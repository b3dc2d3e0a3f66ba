import logging

from fastapi import APIRouter, HTTPException, Request, status

from .schemas import CreateCustomerBody, SetupPage, SubscriptionLookupBody
from .services import subscriptions
from .services import webhooks as dispatcher
from .webhooks import base as webhook_base
from .utils import to_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stripe", tags=["Stripe"])


@router.get("/setup-page", response_model=SetupPage)
def setup_page():
    """Publishable key, discount rules and the plan catalog for the checkout page."""
    return subscriptions.build_setup_page()


@router.post("/create-customer")
def create_customer(body: CreateCustomerBody):
    """Create a Customer and its multi-plan Subscription in one go.

    At this point, associate the returned customer id with your own internal
    representation of a customer, if you have one.
    """
    subscription = subscriptions.create_customer_with_subscription(
        payment_method=body.payment_method,
        email=body.email,
        price_ids=body.price_ids,
    )
    return to_payload(subscription)


@router.post("/subscription")
def get_subscription(body: SubscriptionLookupBody):
    return to_payload(subscriptions.retrieve_subscription(body.subscription_id))


@router.post('/webhook', include_in_schema=False)
async def stripe_webhook(request: Request):
    """Accept Stripe webhook events.

    With a signing secret configured the event is verified and dispatched;
    unknown event types are rejected with 400. Without one the event is
    read straight from the body and always acknowledged.
    """
    if not webhook_base.signing_enabled():
        event = await webhook_base.read_unsigned_event(request)
        logger.info("Unverified webhook event received: %s", event.get("type"))
        return {'status': 'accepted'}

    event = await webhook_base.verify_stripe_signature(request)
    handled = await dispatcher.dispatch(event)
    if not handled:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unhandled event type: {event['type']}")
    return {'status': 'accepted'}
