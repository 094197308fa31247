"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from knowledge_relay.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Slack
    slack_bot_token: str = ""
    slack_signing_secret: str = ""

    # Bedrock knowledge base
    knowledge_base_id: str = ""
    chat_model_id: str = ""

    # SQS
    queue_url: str = ""
    queue_arn: str = ""

    # AWS
    aws_region: str = ""

    # Scheduler
    scheduler_secret: str = ""

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()


def require_setting(settings: Settings, name: str) -> str:
    """Return a non-empty setting value or raise ConfigError naming its env var."""
    value = getattr(settings, name, "")
    if not value:
        raise ConfigError(f"{name.upper()} is not set")
    return value
