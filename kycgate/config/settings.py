"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """SQLite storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "kycgate.db"

    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class UploadSettings(BaseSettings):
    """Direct-upload (S3-compatible) configuration."""

    model_config = SettingsConfigDict(env_prefix="UPLOAD_")

    bucket: str = "kyc-documents"
    endpoint_url: str | None = None
    region: str = "auto"
    access_key_id: str | None = None
    secret_access_key: str | None = None

    url_expiry_seconds: int = 300
    max_file_size: int = 10 * 1024 * 1024  # 10 MB
    allowed_extensions: list[str] = [".pdf", ".jpg", ".jpeg", ".png"]


class NotificationSettings(BaseSettings):
    """Outbound notification configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_")

    backend: Literal["log", "webhook"] = "log"
    webhook_url: str | None = None
    timeout: float = 5.0


class OnboardingSettings(BaseSettings):
    """Client-facing onboarding behaviour."""

    model_config = SettingsConfigDict(env_prefix="ONBOARDING_")

    # Interval the client waits between onboarding-state polls
    poll_interval_seconds: int = 15

    # Days before the renewal date at which active companies are reminded
    renewal_reminder_days: list[int] = [30, 7]


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "KYC Gate"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    onboarding: OnboardingSettings = Field(default_factory=OnboardingSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
