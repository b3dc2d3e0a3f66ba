"""
Root pytest configuration.

Stripe settings are read at import time by the gateway modules, so the
minimal environment has to exist before any test module is collected.
"""

import os

os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("STRIPE_PUBLISHABLE_KEY", "pk_test_dummy")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_dummy")
os.environ.setdefault("BASIC_PRICE_ID", "price_basic_test")
os.environ.setdefault("PRO_PRICE_ID", "price_pro_test")
os.environ.setdefault("DOMAIN", "http://localhost:4242")
