"""
Configuration settings for the retry orchestrator.

All settings are loaded from environment variables with sensible defaults.
Use a .env file for local development.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "retry-orchestrator"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Retry Policy ===
    RETRY_MAX_ATTEMPTS: int = 10  # Includes the first attempt
    RETRY_INITIAL_DELAY: float = 0.1  # seconds
    RETRY_BACKOFF_BASE: float = 2.0  # Exponential backoff multiplier
    RETRY_MAX_DELAY: float = 30.0  # seconds
    RETRY_DEADLINE: Optional[float] = None  # Overall deadline in seconds, CLI only

    # === Classification ===
    ERROR_MAPPING_PATH: Optional[str] = None  # JSON rules replacing the default mapping

    # === HTTP ===
    HTTP_TIMEOUT: float = 30.0  # seconds

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
