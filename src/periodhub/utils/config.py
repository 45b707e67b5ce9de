"""Configuration management."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data storage
    data_dir: Path = Field(default=Path("data"))

    # Site
    base_url: str = Field(default="https://www.periodhub.health")
    default_locale: str = Field(default="zh")

    # Journal capacity
    progress_max_entries: int = Field(default=100, ge=1)
    pain_max_records: int = Field(default=100, ge=1)
    symptom_max_entries: int = Field(default=100, ge=1)
    storage_warning_percent: int = Field(default=80, ge=1, le=100)
    assessment_history_limit: int = Field(default=10, ge=1)

    # E-mail guide service (optional)
    email_api_url: Optional[str] = None

    log_level: str = Field(default="INFO")

    @property
    def has_email_service(self) -> bool:
        return bool(self.email_api_url)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
