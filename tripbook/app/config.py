"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="TRIPBOOK_", extra="ignore"
    )

    # Persistence
    storage_url: str | None = None
    storage_key: str = "homi-trip-storage"

    # Places / geocoding (Nominatim-compatible)
    geocoder_base_url: str = "https://nominatim.openstreetmap.org"
    geocoder_user_agent: str = "tripbook/0.1 (itinerary planner)"
    geocoder_timeout_s: float = 4.0
    geocoder_language: str = "en"
    search_result_limit: int = 5

    # Map defaults
    default_map_lat: float = 48.8566
    default_map_lng: float = 2.3522
    default_map_zoom: int = 13

    # Form defaults
    default_activity_time: str = "12:00"
    default_trip_length_days: int = 7  # end date offset from the start date

    # Photos
    photo_max_bytes: int = 10 * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
