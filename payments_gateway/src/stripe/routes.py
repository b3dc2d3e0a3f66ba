from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from .schemas import (
    CreateCheckoutSessionBody,
    CheckoutSessionCreated,
    CustomerPortalBody,
    CustomerPortalURL,
    CheckoutSetup,
)
from .services import sessions
from .utils import to_payload

# Reference flow: https://github.com/stripe-samples/checkout-single-subscription
router = APIRouter(prefix="/stripe-checkout", tags=["Stripe Checkout"])


@router.get("/hello", response_class=PlainTextResponse)
async def get_hello() -> str:
    return "Hello World!"


@router.get("/checkout-session")
def checkout_session(session_id: str = Query(..., alias="sessionId", min_length=1)):
    """Fetch the Checkout Session to display the JSON result on the success page."""
    return to_payload(sessions.retrieve_checkout_session(session_id))


@router.post("/create-checkout-session", response_model=CheckoutSessionCreated)
def create_checkout_session(body: CreateCheckoutSessionBody):
    """Create a subscription-mode Checkout Session for the chosen price.

    The success URL carries ``?session_id={CHECKOUT_SESSION_ID}`` so the
    redirect lands with the session id as a query param.
    """
    session = sessions.create_checkout_session(price_id=body.price_id)
    return CheckoutSessionCreated(session_id=session["id"])


@router.get("/setup", response_model=CheckoutSetup)
def get_setup():
    settings = sessions.settings
    return CheckoutSetup(
        publishable_key=settings.STRIPE_PUBLISHABLE_KEY,
        basic_price=settings.BASIC_PRICE_ID,
        pro_price=settings.PRO_PRICE_ID,
    )


@router.post("/customer-portal", response_model=CustomerPortalURL)
def get_customer_portal(body: CustomerPortalBody):
    """Return a Stripe Customer-Portal session URL so the customer can manage billing."""
    try:
        portal_session = sessions.create_portal_session(session_id=body.session_id)
    except sessions.MissingCustomerError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return CustomerPortalURL(url=portal_session["url"])
