"""Application configuration."""
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./orders.db"
    database_echo: bool = False

    # Restaurant
    restaurant_name: str = "Mughlai Point"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: str = "*"  # Comma-separated list

    # Static files
    static_dir: str = "public"
    menu_file: str = "public/menu.json"

    # Real-time channel
    realtime_queue_size: int = 100  # Buffered events per dashboard session

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
