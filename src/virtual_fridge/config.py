"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_media_bucket: str = "media"
    jwt_secret: str
    jwt_expires_hours: int = 19
    google_client_id: str
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org/api/v2"
    themealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    firebase_service_account: str | None = None
    admin_token: str | None = None
    notification_cron: str = "0 9,18 * * *"
    notification_timezone: str = "UTC"
    enable_scheduler: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def test_auth_enabled(self) -> bool:
        """Return True when the test-only sign-in route may be exposed."""
        return self.environment in {"local", "test"}
