# payments_gateway/main.py
"""
Payments Gateway
Minimal main file with core FastAPI setup, error handling and routing
"""

import logging
import os

import stripe
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

# This block allows running the script directly while maintaining relative imports
if __name__ == "__main__" and __package__ is None:
    import sys
    from os import path
    sys.path.append(path.dirname(path.dirname(path.abspath(__file__))))
    from payments_gateway.config import get_settings
    from payments_gateway.router_config import setup_routers
else:
    from .config import get_settings
    from .router_config import setup_routers

logger = logging.getLogger(__name__)

SERVICE_NAME = "payments_gateway"


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Reduce verbosity of chatty libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("stripe").setLevel(logging.WARNING)


def _error_body(message: str) -> dict:
    return {"error": {"message": message}}


async def stripe_error_handler(request: Request, exc: stripe.StripeError):
    message = exc.user_message or str(exc)
    logger.error("Stripe call failed on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=500, content=_error_body(message))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_error_body(str(exc)))


def create_app(settings=None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Payments Gateway",
        description="Checkout, subscriptions, customer portal and webhooks forwarded to Stripe",
        version="1.0.0",
    )

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS.split(","),
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS.split(","),
        allow_headers=settings.CORS_ALLOW_HEADERS.split(","),
    )

    app.add_exception_handler(stripe.StripeError, stripe_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/health")
    async def health_check():
        """Simple health check endpoint"""
        return {"status": "healthy", "service": SERVICE_NAME}

    # Setup all application routers
    setup_routers(app)

    # Front-end pages; mounted last so API routes take precedence
    if settings.STATIC_DIR:
        if os.path.isdir(settings.STATIC_DIR):
            app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
        else:
            logger.warning("STATIC_DIR %s does not exist; static pages disabled", settings.STATIC_DIR)

    return app


configure_logging(get_settings().LOG_LEVEL)
app = create_app()

# Main entry point
if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.SERVICE_HOST, port=settings.SERVICE_PORT, log_level=settings.LOG_LEVEL.lower())
