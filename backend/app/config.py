"""Application configuration using Pydantic Settings.

All settings are loaded from environment variables or .env file.
The GitHub token is held as a SecretStr to prevent accidental logging.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="STACKLENS_",
    )

    # Application
    app_name: str = "Stack Lens"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = Field(default=["http://localhost:5173", "http://127.0.0.1:5173"])

    # GitHub API
    github_api_base: str = "https://api.github.com"
    github_token: SecretStr | None = None
    github_timeout_seconds: float = 30.0
    github_max_retries: int = 3
    github_max_concurrent: int = 6
    github_language_fetch_depth: int = 15  # repos with full language-byte maps
    github_repos_per_page: int = 100
    github_events_per_page: int = 30

    # Unauthenticated request budget (client side)
    anonymous_request_limit: int = 25
    anonymous_window_seconds: float = 60.0
    anonymous_debounce_seconds: float = 0.1

    # Prometheus
    metrics_enabled: bool = True

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        return v.lower()

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def has_github_token(self) -> bool:
        return self.github_token is not None and bool(self.github_token.get_secret_value())


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
