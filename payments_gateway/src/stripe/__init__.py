"""Checkout, subscription, billing-portal and webhook endpoints backed by Stripe.

Submodules read StripeSettings at import time, so nothing is imported here;
mount the routers via `payments_gateway.router_config`.
"""
