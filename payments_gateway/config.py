from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Service
    SERVICE_HOST: str = "0.0.0.0"
    SERVICE_PORT: int = 4242

    # CORS settings
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: str = "GET,POST,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type,Authorization,Stripe-Signature"

    # Optional directory with the checkout front-end (index.html, success.html, ...)
    STATIC_DIR: Optional[str] = None

    # Stripe keys live in src/stripe/config.py; ignore them (and anything else) here
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


@lru_cache()
def get_settings() -> GatewaySettings:
    return GatewaySettings()
