from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StripeSettings(BaseSettings):
    """
    Canonical Stripe configuration for the gateway.

    Important:
    - This is the SINGLE SOURCE OF TRUTH for keys, price IDs and redirect URLs
      used by checkout, the billing portal and the multi-plan flow. Consume them
      via get_settings(); do not read os.environ elsewhere.
    - Values are read once at process start and never change afterwards.
    """

    STRIPE_SECRET_KEY: str = Field(...)
    STRIPE_PUBLISHABLE_KEY: str = Field(...)
    # Empty secret disables signature verification on /stripe/webhook
    STRIPE_WEBHOOK_SECRET: str = ""
    # Empty means "use the account's default API version"
    STRIPE_API_VERSION: str = ""
    STRIPE_MAX_NETWORK_RETRIES: int = 2

    # Checkout (single subscription)
    DOMAIN: str = "http://localhost:4242"
    SUCCESS_URL: Optional[str] = None
    CANCEL_URL: Optional[str] = None
    PORTAL_RETURN_URL: Optional[str] = None
    BASIC_PRICE_ID: str = ""
    PRO_PRICE_ID: str = ""

    # Multiple plan subscriptions
    # Comma separated product names; each maps to the "<name>-monthly-usd" price lookup key
    PRODUCT_NAMES: str = ""
    MIN_PRODUCTS_FOR_DISCOUNT: int = 2
    DISCOUNT_FACTOR: float = 0.8
    COUPON_ID: Optional[str] = None

    # The shared .env also carries gateway keys (CORS, STATIC_DIR, ...)
    model_config = SettingsConfigDict(extra="ignore", env_file=".env")

    @property
    def checkout_success_url(self) -> str:
        # {CHECKOUT_SESSION_ID} is substituted by Stripe on redirect
        return self.SUCCESS_URL or f"{self.DOMAIN}/success.html?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def checkout_cancel_url(self) -> str:
        return self.CANCEL_URL or f"{self.DOMAIN}/canceled.html"

    @property
    def portal_return_url(self) -> str:
        return self.PORTAL_RETURN_URL or self.DOMAIN

    @property
    def product_names(self) -> List[str]:
        return [name.strip() for name in self.PRODUCT_NAMES.split(",") if name.strip()]


@lru_cache()
def get_settings() -> StripeSettings:  # pragma: no cover
    return StripeSettings()
