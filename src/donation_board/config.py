"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_key: str
    storage_bucket: str = "item-photos"
    listings_table: str = "announcements"
    realtime_channel: str = "announcements_changes"
    realtime_enabled: bool = True
    page_size: int = 12
    search_debounce_ms: int = 300
    preferences_path: str | None = "app-storage.json"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def search_debounce_seconds(self) -> float:
        """Return the search debounce window in seconds."""
        return self.search_debounce_ms / 1000
