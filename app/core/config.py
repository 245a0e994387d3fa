# app/core/config.py

import os
from functools import lru_cache
from typing import Annotated, List
from pydantic import ConfigDict, BeforeValidator
from pydantic_settings import BaseSettings, NoDecode


def _parse_origin_list(value):
    if value in (None, "", []):
        return []
    if isinstance(value, str):
        return [origin.strip() for origin in value.split(",") if origin.strip()]
    if isinstance(value, (list, tuple, set)):
        return [str(origin).strip() for origin in value if str(origin).strip()]
    return []


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    APP_NAME: str = "Storefront Shipping Service"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_REQUEST_BODIES: bool = False  # only honoured in development

    # Storefront origins allowed to call the API (comma separated)
    CORS_ORIGINS: Annotated[List[str], NoDecode, BeforeValidator(lambda v: _parse_origin_list(v))] = []

    # Rate limiting store (leave empty to disable rate limiting)
    REDIS_URL: str = ""

    # Public shipping calculator limits
    SHIPPING_RATE_LIMIT: int = 10         # requests per window
    SHIPPING_RATE_LIMIT_WINDOW: int = 60  # seconds

    model_config = ConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env') if os.path.exists(os.environ.get('ENV_FILE', '.env')) else None,
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


@lru_cache()
def get_settings():
    """Cached settings to avoid loading .env file for every request"""
    return Settings()

def get_settings_no_cache():
    """Get settings without caching - useful for testing different environments"""
    return Settings()

def clear_settings_cache():
    """Clear the settings cache - useful when switching between environments"""
    get_settings.cache_clear()
