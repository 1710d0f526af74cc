"""
TempoPush configuration using Pydantic Settings.
Every section can be overridden through environment variables or a .env file.
"""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env before any BaseSettings subclass reads env vars
load_dotenv()


class DatabaseSettings(BaseSettings):
    url: str = "sqlite+aiosqlite:///./tempo_push.db"
    echo: bool = False
    create_schema: bool = True

    model_config = {"env_prefix": "DATABASE_"}


class PushSettings(BaseSettings):
    """VAPID credentials and delivery limits for Web Push."""

    public_key: str = ""
    private_key: str = ""
    subject: str = "mailto:admin@localhost"
    ttl: int = 30
    timeout_seconds: float = 10.0
    concurrency: int = 4

    model_config = {"env_prefix": "VAPID_"}

    @property
    def configured(self) -> bool:
        return bool(self.public_key and self.private_key)


class WebSettings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 8080
    allowed_origins: list[str] = Field(default_factory=list)

    model_config = {"env_prefix": "WEB_"}


class LoggingSettings(BaseSettings):
    level: str = "INFO"

    model_config = {"env_prefix": "LOG_"}


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    app_env: str = "development"
    persistence_backend: str = "sql"  # "sql" or "memory"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    push: PushSettings = Field(default_factory=PushSettings)
    web: WebSettings = Field(default_factory=WebSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def validate_production(self) -> None:
        """Validate critical settings for production environment."""
        if self.app_env == "production" and not self.push.configured:
            raise RuntimeError(
                "FATAL: VAPID keys are required in production. "
                "Set VAPID_PUBLIC_KEY and VAPID_PRIVATE_KEY."
            )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
