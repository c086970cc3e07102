"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    nutrition_plans_table: str = "nutrition_plans"
    recalculation_delay_ms: int = 500
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def recalculation_delay_seconds(self) -> float:
        """Debounce delay for target recalculation, in seconds."""
        return max(self.recalculation_delay_ms, 0) / 1000
