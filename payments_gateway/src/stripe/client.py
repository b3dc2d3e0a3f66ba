import stripe
from functools import lru_cache
from .config import get_settings


@lru_cache()
def get_stripe() -> stripe:  # pragma: no cover
    """Configure the module-level Stripe SDK from StripeSettings on first use."""
    settings = get_settings()
    stripe.api_key = settings.STRIPE_SECRET_KEY
    # Leave the account default in place unless a version is pinned
    if settings.STRIPE_API_VERSION:
        stripe.api_version = settings.STRIPE_API_VERSION
    stripe.max_network_retries = settings.STRIPE_MAX_NETWORK_RETRIES
    stripe.enable_telemetry = False
    return stripe
