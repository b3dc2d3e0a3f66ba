import logging
from typing import Any, Dict, List, Optional

from ..client import get_stripe
from ..config import get_settings
from ..audit import log
from ..utils import lookup_keys_for, subscription_items

logger = logging.getLogger(__name__)

# Stripe client and settings (tests may monkeypatch these module attributes)
stripe = get_stripe()
settings = get_settings()


def _product_view(price) -> Dict[str, Any]:
    product = price["product"]
    metadata = product["metadata"] if not isinstance(product, str) else {}
    return {
        "price": {"id": price["id"], "unit_amount": price["unit_amount"]},
        "title": metadata["title"] if "title" in metadata else None,
        "emoji": metadata["emoji"] if "emoji" in metadata else None,
    }


def list_plan_products() -> List[Dict[str, Any]]:
    """Resolve the configured product names to their monthly USD prices."""
    lookup_keys = lookup_keys_for(settings.product_names)
    if not lookup_keys:
        return []
    try:
        prices = stripe.Price.list(lookup_keys=lookup_keys, expand=["data.product"])
    except Exception as e:
        logger.error("Price lookup failed for %s: %s", lookup_keys, e)
        raise
    return [_product_view(price) for price in prices["data"]]


def build_setup_page() -> Dict[str, Any]:
    return {
        "publicKey": settings.STRIPE_PUBLISHABLE_KEY,
        "minProductsForDiscount": settings.MIN_PRODUCTS_FOR_DISCOUNT,
        "discountFactor": settings.DISCOUNT_FACTOR,
        "products": list_plan_products(),
    }


def coupon_for(price_ids: List[str]) -> Optional[str]:
    """Coupon applies once the number of plans bought reaches the threshold."""
    if len(price_ids) >= settings.MIN_PRODUCTS_FOR_DISCOUNT:
        return settings.COUPON_ID or None
    return None


def create_customer_with_subscription(*, payment_method: str, email: str, price_ids: List[str]):
    """Create a Customer with a default PaymentMethod, then subscribe it to every price."""
    try:
        customer = stripe.Customer.create(
            payment_method=payment_method,
            email=email,
            invoice_settings={"default_payment_method": payment_method},
        )
    except Exception as e:
        logger.error("Customer creation failed for %s: %s", email, e)
        log("customer_create", {"email": email}, "error", str(e))
        raise
    customer_id = customer["id"]

    params: Dict[str, Any] = {
        "customer": customer_id,
        "items": subscription_items(price_ids),
        "expand": ["latest_invoice.payment_intent"],
    }
    coupon = coupon_for(price_ids)
    if coupon:
        params["discounts"] = [{"coupon": coupon}]

    try:
        subscription = stripe.Subscription.create(**params)
    except Exception as e:
        logger.error("Subscription creation failed for customer %s: %s", customer_id, e)
        log("subscription_create", {"customer_id": customer_id, "price_ids": price_ids}, "error", str(e))
        raise

    log("subscription_create", {
        "customer_id": customer_id,
        "subscription_id": subscription["id"],
        "price_ids": price_ids,
        "coupon": coupon,
    })
    return subscription


def retrieve_subscription(subscription_id: str):
    try:
        return stripe.Subscription.retrieve(subscription_id)
    except Exception as e:
        logger.error("Subscription %s retrieval failed: %s", subscription_id, e)
        raise
