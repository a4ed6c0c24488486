"""Application configuration settings."""

from functools import lru_cache
from typing import Literal, Optional
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_title: str = "URL Shortener Service"
    app_version: str = "0.1.0"
    app_description: str = "Shortens URLs and redirects short ids to their targets"

    # Server
    host: str = "127.0.0.1"
    port: int = 9090
    log_level: str = "INFO"
    shutdown_timeout: int = 30
    keep_alive_timeout: int = 120

    # Store
    store_backend: Literal["mongo", "sqlite", "memory"] = "mongo"

    mongo_uri: str = "mongodb://localhost:27017"
    mongo_username: Optional[str] = None
    mongo_password: Optional[SecretStr] = None
    mongo_database: str = "url_shortener"
    mongo_collection: str = "url_associations"
    mongo_timeout_ms: int = 5000

    sqlite_path: str = "url_shortener.db"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
