"""Outbound mail.

``MailSender`` is the port used by the notification service; ``SmtpMailSender``
delivers through smtplib in a worker thread so the event loop never blocks on
the network.
"""

from __future__ import annotations

import asyncio
import smtplib
import ssl
from abc import ABC, abstractmethod
from email.message import EmailMessage
from email.utils import parseaddr

from noruno.models import MailSettings
from noruno.models.config_models import SmtpConfig
from noruno.models.exceptions import ConfigurationError, TransportError
from noruno.utils.logger import get_logger

logger = get_logger(__name__)

TEST_SUBJECT = "Test Email from Noruno"
TEST_BODY = "This is a test email to verify your settings."
TEST_SUCCESS = "Email sent successfully"


class MailSender(ABC):
    """Sends a single plain-text message."""

    @abstractmethod
    async def send(self, sender: str, recipient: str, subject: str, body: str) -> None:
        """Send a message.

        Raises:
            TransportError: On address, authentication or network failure
        """

    def for_account(self, settings: MailSettings) -> MailSender:
        """Sender authenticated as the account in settings."""
        return self


def _check_address(address: str) -> str:
    _, parsed = parseaddr(address)
    if not parsed or "@" not in parsed or parsed != address.strip():
        raise TransportError(f"Invalid email address: {address!r}")
    return parsed


class SmtpMailSender(MailSender):
    """SMTP delivery, implicit TLS (SMTP_SSL) or STARTTLS."""

    def __init__(
        self,
        host: str = "smtp.gmail.com",
        port: int = 465,
        use_ssl: bool = True,
        timeout: int = 30,
        username: str = "",
        password: str = "",
    ):
        self.host = host
        self.port = port
        self.use_ssl = use_ssl
        self.timeout = timeout
        self.username = username
        self.password = password

    @classmethod
    def from_config(cls, config: SmtpConfig) -> SmtpMailSender:
        return cls(
            host=config.host,
            port=config.port,
            use_ssl=config.use_ssl,
            timeout=config.timeout,
        )

    def for_account(self, settings: MailSettings) -> SmtpMailSender:
        return SmtpMailSender(
            host=self.host,
            port=self.port,
            use_ssl=self.use_ssl,
            timeout=self.timeout,
            username=settings.email,
            password=settings.app_password,
        )

    async def send(self, sender: str, recipient: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = _check_address(sender)
        message["To"] = _check_address(recipient)
        message["Subject"] = subject
        message.set_content(body)
        await asyncio.to_thread(self._deliver, message)

    def _deliver(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        try:
            if self.use_ssl:
                server = smtplib.SMTP_SSL(
                    self.host, self.port, timeout=self.timeout, context=context
                )
            else:
                server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with server:
                if not self.use_ssl:
                    server.starttls(context=context)
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.warning("SMTP send to %s failed: %s", message["To"], e)
            raise TransportError(f"SMTP send failed: {e}") from e
        logger.info("Sent mail to %s: %s", message["To"], message["Subject"])


async def send_test_email(sender: MailSender, settings: MailSettings) -> str:
    """Send a test message to the configured address.

    Returns:
        Confirmation message

    Raises:
        ConfigurationError: If the mail account is not configured
        TransportError: If delivery fails
    """
    if not settings.is_configured:
        raise ConfigurationError("Email settings are not configured")
    await sender.for_account(settings).send(
        settings.email, settings.email, TEST_SUBJECT, TEST_BODY
    )
    return TEST_SUCCESS
