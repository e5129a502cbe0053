# favsync Mail Notifications
# Best-effort SMTP alerts for critical failures

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formatdate
from typing import Optional

from favsync.config.schema import SmtpConfig

logger = logging.getLogger(__name__)

SMTPS_PORT = 465
SMTP_TIMEOUT = 30
SENDER_NAME = "Bilibili Sync"

_SCHEMES = ("smtps://", "smtp://")


class NotificationDispatchError(Exception):
    """Exception raised when an alert email cannot be delivered."""


def parse_smtp_host(url: str) -> str:
    """
    Extract the relay host from an SMTP URL.

    Args:
        url: URL such as ``smtps://smtp.example.com:465``.

    Returns:
        Host name without scheme or port.

    Raises:
        NotificationDispatchError: If the URL has no smtp(s) scheme or no host.
    """
    for scheme in _SCHEMES:
        if url.startswith(scheme):
            host = url[len(scheme):].split(":", 1)[0]
            if host:
                return host
            break
    raise NotificationDispatchError(f"Cannot parse a host name from SMTP_URL '{url}'")


def is_delivery_enabled(password: Optional[str]) -> bool:
    """Return False for an absent, empty, or 'null' sender password."""
    if password is None:
        return False
    return password != "" and password.lower() != "null"


def build_message(smtp: SmtpConfig, subject: str, body: str) -> EmailMessage:
    """Build the alert email."""
    message = EmailMessage()
    message["From"] = f"{SENDER_NAME} <{smtp.sender_email}>"
    message["To"] = smtp.recipient_email
    message["Subject"] = subject
    message["Date"] = formatdate(localtime=True)
    message.set_content(body)
    return message


def send_notification(smtp: Optional[SmtpConfig], subject: str, body: str) -> bool:
    """
    Send an alert email.

    Args:
        smtp: Mail settings, or None when no channel is configured.
        subject: Message subject.
        body: Plain-text message body.

    Returns:
        True if the message was delivered or delivery is disabled.

    Raises:
        NotificationDispatchError: If delivery was attempted and failed.
    """
    if smtp is None:
        logger.warning("SMTP is not configured, skipping email notification.")
        return True

    if not is_delivery_enabled(smtp.sender_password):
        logger.warning("SMTP sender_password is empty or 'null', skipping email notification.")
        return True

    logger.info("Sending email notification...")

    host = parse_smtp_host(smtp.url)
    try:
        message = build_message(smtp, subject, body)
        with smtplib.SMTP_SSL(host, SMTPS_PORT, timeout=SMTP_TIMEOUT) as server:
            server.login(smtp.sender_email, smtp.sender_password)
            server.send_message(message)
    except (smtplib.SMTPException, OSError, ValueError) as e:
        raise NotificationDispatchError(f"Email notification failed, check SMTP settings and network: {e}") from e

    logger.info("Email notification sent.")
    return True


class NotificationDispatcher:
    """
    Delivers critical-failure alerts.

    Dispatch never raises: a failed alert is logged and must not replace
    the failure it was reporting.
    """

    def __init__(self, smtp: Optional[SmtpConfig]):
        self.smtp = smtp

    def dispatch(self, subject: str, body: str) -> bool:
        """
        Send an alert, swallowing delivery errors.

        Returns:
            False if delivery failed, True otherwise (including when skipped).
        """
        try:
            send_notification(self.smtp, subject, body)
        except NotificationDispatchError as e:
            logger.error("Failed to send email notification: %s", e)
            return False
        return True
