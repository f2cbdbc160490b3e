"""Email Transport Implementations

Provides concrete implementations for sending invoice emails.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional
from src.app.services.email_transport import (
    EmailDeliveryError,
    EmailTransport,
    OutgoingEmail,
)

logger = logging.getLogger(__name__)


def build_mime_message(message: OutgoingEmail) -> EmailMessage:
    mime = EmailMessage()
    mime["From"] = message.from_address
    mime["To"] = message.to
    mime["Subject"] = message.subject
    # smtplib.send_message drops the Bcc header but still delivers to it
    if message.bcc:
        mime["Bcc"] = message.bcc
    mime.set_content(message.body)

    for attachment in message.attachments:
        maintype, _, subtype = attachment.mime_type.partition("/")
        mime.add_attachment(
            attachment.content,
            maintype=maintype,
            subtype=subtype or "octet-stream",
            filename=attachment.filename,
        )
    return mime


class LoggingEmailTransport(EmailTransport):
    """
    Email transport that only logs messages

    Opt-in with EMAIL_LOG_ONLY for development: the message is reported
    as delivered although nothing leaves the process.
    """

    async def send(self, message: OutgoingEmail) -> None:
        logger.warning(
            f"[EMAIL NOT SENT] To: {message.to}, Bcc: {message.bcc}, "
            f"Subject: {message.subject}, "
            f"Attachments: {[a.filename for a in message.attachments]}"
        )


class UnconfiguredEmailTransport(EmailTransport):
    """
    Email transport used when no SMTP server is configured

    Every send fails, so invoices are never marked sent without delivery.
    """

    async def send(self, message: OutgoingEmail) -> None:
        logger.error(f"Email '{message.subject}' to {message.to} not sent: SMTP_HOST is not configured")
        raise EmailDeliveryError("No SMTP server configured (set SMTP_HOST)")


class SmtpEmailTransport(EmailTransport):
    """
    Email transport over SMTP

    Port 465 uses implicit TLS, any other port upgrades with STARTTLS.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize SMTP transport

        Args:
            host: SMTP server host
            port: SMTP server port
            username: Optional login
            password: Optional password
            timeout: Connection timeout in seconds
        """
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    def _deliver(self, mime: EmailMessage):
        if self.port == 465:
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        with server:
            if self.port != 465:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(mime)

    async def send(self, message: OutgoingEmail) -> None:
        """
        Send a message through the SMTP server

        Args:
            message: OutgoingEmail to deliver

        Raises:
            EmailDeliveryError: On any SMTP or connection failure
        """
        mime = build_mime_message(message)
        try:
            await asyncio.to_thread(self._deliver, mime)
            logger.info(f"Email '{message.subject}' sent to {message.to} via {self.host}")
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email '{message.subject}' to {message.to}: {e}")
            raise EmailDeliveryError(str(e)) from e


def create_email_transport(config) -> EmailTransport:
    """
    Factory function to create appropriate email transport

    Args:
        config: ApplicationConfig. SMTP is used when SMTP_HOST is set,
                messages are only logged when EMAIL_LOG_ONLY is set,
                otherwise every send fails.

    Returns:
        Configured EmailTransport
    """
    if config.SMTP_HOST:
        return SmtpEmailTransport(
            host=config.SMTP_HOST,
            port=int(config.SMTP_PORT),
            username=config.SMTP_USER,
            password=config.SMTP_PASSWORD,
            timeout=config.SMTP_TIMEOUT,
        )
    if config.EMAIL_LOG_ONLY:
        return LoggingEmailTransport()
    return UnconfiguredEmailTransport()
