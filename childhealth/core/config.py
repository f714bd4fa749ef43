"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application environment
    env: Literal["dev", "test", "staging", "prod"] = "dev"

    # Logging
    log_level: str = "INFO"

    # Usage log persistence
    usage_log_backend: Literal["file", "sqlite", "memory"] = "file"
    storage_path: str = "./storage"
    database_url: str = "sqlite:///./storage/childhealth.db"

    # Card cooldown after a successful non-admin login
    account_cooldown_hours: int = 24

    @property
    def account_cooldown_ms(self) -> int:
        """Cooldown window in epoch milliseconds."""
        return self.account_cooldown_hours * 60 * 60 * 1000

    @property
    def is_dev(self) -> bool:
        """Check if running in development mode."""
        return self.env == "dev"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
