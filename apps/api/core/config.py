"""Centralized application configuration via Pydantic Settings.

Loads all env vars into a typed Settings instance shared by the API,
the background loops and the Celery worker.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service-role key; the API is the only writer",
    )
    TRANSACTIONS_TABLE: str = Field(default="transactions", description="Transactions table name")

    # Access
    API_KEY: str = Field(
        default="",
        description="Shared secret expected in X-API-Key; empty disables the check",
    )

    # CORS
    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Comma-separated allowed origins for CORS",
    )

    # Redis
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )

    # Local time
    TIMEZONE: str = Field(
        default="Asia/Ho_Chi_Minh",
        description="IANA zone for report periods and the bulletin schedule",
    )

    # Market rates
    RATE_REFRESH_SECONDS: int = Field(default=600, description="Rate refresh cadence")
    RATE_SOURCE_TIMEOUT_SECONDS: float = Field(default=5.0, description="Per-source fetch timeout")

    # Keep-alive
    KEEPALIVE_URL: str = Field(default="", description="URL pinged periodically; empty disables")
    KEEPALIVE_INTERVAL_SECONDS: int = Field(default=600, description="Keep-alive ping cadence")

    # Telegram bulletin
    TELEGRAM_TOKEN: str = Field(default="", description="Bot token for the market bulletin")
    BULLETIN_HOURS: str = Field(default="7,19", description="Comma-separated local hours")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Python log level")
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # App
    APP_VERSION: str = Field(default="1.0.0", description="Application version")

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def bulletin_hours(self) -> list[int]:
        return [int(h) for h in self.BULLETIN_HOURS.split(",") if h.strip()]

    @property
    def log_level(self) -> str:
        return self.LOG_LEVEL

    @property
    def json_logs(self) -> bool:
        return self.ENVIRONMENT == "production"

    model_config = {"env_file": ".env", "extra": "ignore"}


def get_settings() -> Settings:
    """Factory for Settings — allows test override."""
    return Settings()


# Module-level singleton (lazy: only created when first accessed)
try:
    settings = get_settings()
except Exception:
    # During testing, env vars may not be set — defer to test fixtures
    settings = None  # type: ignore[assignment]
