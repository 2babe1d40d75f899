"""
Configuration using Pydantic Settings.
Loads from environment variables / .env file.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``CRAFT_CMS_*`` environment variables."""

    # Record store
    STORE_URL: str = ""
    STORE_KEY: str = ""
    TIMEOUT: float = 30
    RETRY_ATTEMPTS: int = 1

    # Local storage for posts
    LOCAL_STORAGE_PATH: Path = Path("./workspace/local-storage.json")

    model_config = SettingsConfigDict(
        env_prefix="CRAFT_CMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.STORE_URL and self.STORE_KEY)

    def client_config(self) -> dict:
        """Config dict for StoreClient."""
        return {
            "base_url": self.STORE_URL,
            "api_key": self.STORE_KEY,
            "timeout": self.TIMEOUT,
            "retry_attempts": self.RETRY_ATTEMPTS,
            "headers": {"User-Agent": "craft-cms/1.0"},
        }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
