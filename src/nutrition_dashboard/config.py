"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str
    api_token: str | None = None
    request_timeout_seconds: float = 10
    search_debounce_seconds: float = 0.3
    conversation_poll_seconds: float = 5
    conversation_list_poll_seconds: float = 15
    calorie_history_days: int = 7
    weight_history_days: int = 30
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

