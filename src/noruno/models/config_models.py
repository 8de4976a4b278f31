"""Application configuration models.

Loaded from and saved to ``config.json`` by the ConfigService.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Persistence backend configuration."""

    backend: Literal["sqlite", "json"] = Field(
        default="sqlite", description="Storage backend"
    )
    data_dir: str | None = Field(
        default=None, description="Data directory (platform default when unset)"
    )

    @field_validator("data_dir")
    @classmethod
    def validate_data_dir(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not v.strip():
            raise ValueError("data_dir cannot be empty")
        return v.strip()


class NotificationConfig(BaseModel):
    """Reminder scheduler configuration."""

    enabled: bool = Field(default=True)
    interval_seconds: int = Field(default=60, ge=1)


class SmtpConfig(BaseModel):
    """SMTP server used to deliver reminders."""

    host: str = Field(default="smtp.gmail.com")
    port: int = Field(default=465, ge=1, le=65535)
    use_ssl: bool = Field(default=True, description="Implicit TLS (else STARTTLS)")
    timeout: int = Field(default=30, ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


class AppConfig(BaseModel):
    """Main Noruno configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    smtp: SmtpConfig = Field(default_factory=SmtpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
