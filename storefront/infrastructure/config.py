"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Storage
    storage_backend: Literal["memory", "database"] = "memory"
    database_url: str = "postgresql+asyncpg://storefront:storefront_dev_password@db:5432/storefront"

    # Authentication
    jwt_secret: str = "dev-jwt-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expires_in_seconds: int = 7 * 24 * 60 * 60
    bcrypt_rounds: int = 10

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
