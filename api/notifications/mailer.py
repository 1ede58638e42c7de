"""
Outbound mail through an SMTP relay.

Delivery is fire-and-forget: callers get no confirmation and failures are
only logged. Relay credentials come from the environment.
"""

from __future__ import annotations

import logging
import os
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

DEFAULT_SMTP_PORT = 2525
DEFAULT_TIMEOUT_S = 10.0

TEST_SUBJECT = "Test Email"
TEST_BODY = "This is a test email sent from the song market API."

logger = logging.getLogger(__name__)


class MailError(RuntimeError):
    pass


@dataclass(frozen=True)
class SmtpSettings:
    host: str
    port: int
    username: str
    password: str
    sender: str
    recipient: str


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def smtp_settings() -> SmtpSettings:
    host = os.environ.get("SMTP_HOST", "").strip()
    if not host:
        raise MailError("SMTP_HOST is not set.")

    sender = os.environ.get("MAIL_FROM", "").strip()
    recipient = os.environ.get("MAIL_TO", "").strip()
    if not sender or not recipient:
        raise MailError("MAIL_FROM and MAIL_TO must both be set.")

    return SmtpSettings(
        host=host,
        port=_env_int("SMTP_PORT", DEFAULT_SMTP_PORT),
        username=os.environ.get("SMTP_USER", "").strip(),
        password=os.environ.get("SMTP_PASSWORD", ""),
        sender=sender,
        recipient=recipient,
    )


def build_message(settings: SmtpSettings, *, subject: str, body: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = settings.sender
    message["To"] = settings.recipient
    message["Subject"] = subject
    message.set_content(body)
    return message


def send_mail(settings: SmtpSettings, message: EmailMessage) -> None:
    try:
        with smtplib.SMTP(settings.host, settings.port, timeout=DEFAULT_TIMEOUT_S) as smtp:
            if settings.username:
                smtp.login(settings.username, settings.password)
            smtp.send_message(message)
    except (smtplib.SMTPException, OSError) as exc:
        raise MailError(f"SMTP delivery to {settings.host}:{settings.port} failed: {exc}") from exc


def send_test_email_background() -> None:
    """
    Send the fixed test message.

    This should never raise to the caller; we just log the outcome.
    """
    try:
        settings = smtp_settings()
        message = build_message(settings, subject=TEST_SUBJECT, body=TEST_BODY)
        send_mail(settings, message)
        logger.info("mail_sent to=%s subject=%s", settings.recipient, TEST_SUBJECT)
    except Exception:
        logger.exception("mail_failed subject=%s", TEST_SUBJECT)
