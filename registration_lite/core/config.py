"""
Widget configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Registration Lite"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Ordering API
    API_BASE_URL: str = "https://api.dev.fnopen.com"
    API_PREFIX: str = "/api/v1"
    REQUEST_TIMEOUT: float = 30.0

    # Relations expanded on each call
    TICKET_TYPES_EXPAND: str = "badge_type,badge_type.access_levels,badge_type.badge_features"
    RESERVATION_EXPAND: str = "tickets,tickets.owner,tickets.ticket_type,tickets.ticket_type.taxes"
    DELETE_RESERVATION_EXPAND: str = "tickets,tickets.owner"
    CHECKOUT_EXPAND: str = "tickets,tickets.owner,tickets.ticket_type"

    # Payments
    DEFAULT_PAYMENT_PROVIDER: str = "stripe"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
