from __future__ import annotations

import base64
import logging
from typing import Tuple

from googleapiclient.errors import HttpError
from google.auth.exceptions import GoogleAuthError

from core.config import AppSettings
from schemas.booking import NotificationMessage
from services.communication import build_email_message

from .client import build_gmail_service


logger = logging.getLogger("services.gmail.sender")

_GMAIL_ERRORS = (HttpError, GoogleAuthError, RuntimeError, OSError)


class GmailApiTransport:
    """Sends notifications through the Gmail REST API as the authorized user.

    A service is built per call: the underlying httplib2 client is not
    thread-safe and both booking emails are sent from worker threads at once.
    """

    def __init__(self, settings: AppSettings) -> None:
        self.token_file = settings.google_token_file

    def verify(self) -> Tuple[bool, str | None]:
        try:
            service = build_gmail_service(self.token_file)
            profile = service.users().getProfile(userId="me").execute()
            logger.info("gmail.profile_ok", extra={"email": profile.get("emailAddress")})
            return True, None
        except _GMAIL_ERRORS as exc:
            return False, str(exc)

    def send(self, message: NotificationMessage) -> Tuple[bool, str | None]:
        try:
            service = build_gmail_service(self.token_file)
            msg = build_email_message(message)
            raw = base64.urlsafe_b64encode(msg.as_bytes()).decode("utf-8")
            resp = service.users().messages().send(userId="me", body={"raw": raw}).execute()
            return True, resp.get("id")
        except _GMAIL_ERRORS as exc:
            logger.warning("gmail.send_failed", extra={"to": message.recipient, "error": str(exc)})
            return False, str(exc)
