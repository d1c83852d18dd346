"""Application configuration via Pydantic Settings."""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # API Settings
    PROJECT_NAME: str = "Threadkeeper API"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"

    # Logging
    LOG_LEVEL: str = "INFO"  # Level for the threadkeeper.* loggers

    # Request Limits
    MAX_THREADS_PER_REQUEST: int = 500  # Batch dedup is O(n²) in the thread count

    # CORS Settings
    BACKEND_CORS_ORIGINS: List[str] = ["*"]


# Global settings instance
settings = Settings()
