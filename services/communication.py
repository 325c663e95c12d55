from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Protocol, Tuple

from html2text import html2text

from core.config import AppSettings
from schemas.booking import NotificationMessage


logger = logging.getLogger(__name__)


class MailTransportError(Exception):
    """Raised when a notification could not be handed to the mail transport."""


class MailTransport(Protocol):
    def verify(self) -> Tuple[bool, str | None]: ...

    def send(self, message: NotificationMessage) -> Tuple[bool, str | None]: ...


def build_email_message(message: NotificationMessage) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = message.sender
    msg["To"] = message.recipient
    msg["Subject"] = message.subject
    msg["Message-ID"] = make_msgid()
    # Plain-text part first so clients without HTML support still get the details
    msg.set_content(html2text(message.html))
    msg.add_alternative(message.html, subtype="html")
    return msg


class EmailService:
    """SMTP email sender (supports Gmail / generic SMTP)."""
    def __init__(self, settings: AppSettings) -> None:
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.email_user
        self.smtp_pass = settings.email_pass
        self.timeout = settings.smtp_timeout

    def _connect(self) -> smtplib.SMTP:
        s = smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout)
        try:
            s.ehlo(); s.starttls(); s.ehlo(); s.login(self.smtp_user, self.smtp_pass)
        except (smtplib.SMTPException, OSError):
            s.close()
            raise
        return s

    def verify(self) -> Tuple[bool, str | None]:
        try:
            with self._connect() as s:
                s.noop()
            return True, None
        except (smtplib.SMTPException, OSError) as exc:
            return False, str(exc)

    def send(self, message: NotificationMessage) -> Tuple[bool, str | None]:
        try:
            msg = build_email_message(message)
            with self._connect() as s:
                s.send_message(msg)
            logger.info("email_send.ok", extra={"to": message.recipient, "subject": message.subject})
            return True, msg["Message-ID"]
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("email_send.failed", extra={"to": message.recipient, "error": str(exc)})
            return False, str(exc)


def build_transport(settings: AppSettings) -> MailTransport:
    if settings.mail_transport == "gmail_api":
        from services.gmail.sender import GmailApiTransport

        return GmailApiTransport(settings)
    return EmailService(settings)
