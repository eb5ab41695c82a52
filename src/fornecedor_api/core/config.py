"""
Application settings.

Loaded from environment variables (and an optional .env file) through
pydantic-settings. Use get_settings() instead of instantiating Settings
directly so every component shares the same cached instance.
"""

import functools

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the API, the CLI and migrations."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    ENVIRONMENT: str = "development"
    SERVICE_NAME: str = "fornecedor-api"

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./fornecedores.db"
    AUTO_CREATE_TABLES: bool = True

    # --- JWT ---
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 120
    JWT_ISSUER: str = "fornecedor-api"
    JWT_AUDIENCE: str = "https://localhost"

    # --- Identity ---
    PASSWORD_REQUIRED_LENGTH: int = 6
    LOCKOUT_MAX_FAILED_ATTEMPTS: int = 5
    LOCKOUT_MINUTES: int = 5

    # --- HTTP ---
    CORS_ORIGINS: list[str] = ["*"]
    FORCE_HTTPS: bool = False

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


@functools.lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return Settings()
