"""Mail settings model."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_NOTIFICATION_MINUTES = 1440


class MailSettings(BaseModel):
    """Sender account and global reminder threshold.

    Attributes:
        email: Sender (and recipient) address
        app_password: App-specific SMTP password
        notification_minutes: Default reminder threshold before the due date
    """

    email: str = ""
    app_password: str = ""
    notification_minutes: int = Field(default=DEFAULT_NOTIFICATION_MINUTES, ge=0)

    @property
    def is_configured(self) -> bool:
        return bool(self.email) and bool(self.app_password)

    def masked(self) -> dict:
        """Dump suitable for display, with the password hidden."""
        data = self.model_dump()
        if data["app_password"]:
            data["app_password"] = "********"
        return data
