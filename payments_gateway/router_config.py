# payments_gateway/router_config.py
"""
Router configuration for the payments gateway
Centralized router management separated from main.py
"""


def setup_routers(app):
    """Configure all application routers"""

    from .src.stripe.routes import router as checkout_router
    from .src.stripe.subscription_routes import router as stripe_router

    # Single subscription checkout + customer portal
    app.include_router(checkout_router)

    # Multiple plan subscriptions and webhooks
    app.include_router(stripe_router)

    return app
