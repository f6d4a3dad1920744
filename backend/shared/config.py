"""
Centralized configuration for the ChurchContent backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., STRIPE_*, SUPABASE_*).
"""

import logging
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ChurchContent API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4"
    openai_temperature: float = 0.7
    generation_timeout_seconds: float = 120.0

    # Free tier: lifetime number of generations without a subscription
    free_generation_limit: int = 3

    # Rate-limit counter storage (a limits storage URI, e.g. memory:// or redis://host:6379)
    rate_limit_storage_uri: str = "memory://"

    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_price_id: str = ""

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:3000"


# Setting name -> what it is, for the startup environment report
REQUIRED_SETTINGS = {
    "supabase_url": "Supabase project URL",
    "supabase_service_role_key": "Supabase service role key",
    "openai_api_key": "OpenAI API key",
    "stripe_secret_key": "Stripe secret key",
    "stripe_price_id": "Stripe price ID",
    "stripe_webhook_secret": "Stripe webhook secret",
}


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def validate_environment(settings: Settings) -> list[str]:
    """
    Report required settings that are missing.

    Missing settings are logged rather than raised so the API can still
    start (health checks, docs) in a partially configured environment.

    Returns:
        Names of the missing settings
    """
    missing = [
        name for name in REQUIRED_SETTINGS
        if not getattr(settings, name)
    ]
    if missing:
        logger.error(
            "Missing required environment variables:\n%s",
            "\n".join(f"  - {name.upper()}: {REQUIRED_SETTINGS[name]}" for name in missing),
        )
    return missing
