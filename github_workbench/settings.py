"""Application settings loaded from environment variables and .env file."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "AI-Git-Workbench/1.0.0"


class Settings(BaseSettings):
    """Settings for the GitHub workbench client."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: str | None = None
    github_api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT

    # Attempts per logical call, including the first one
    max_retries: int = Field(default=3, ge=1)
    # backoff(attempt) = backoff_base_seconds * 2 ** attempt
    backoff_base_seconds: float = Field(default=0.5, ge=0)
    timeout_seconds: float = Field(default=30.0, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
