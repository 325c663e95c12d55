from __future__ import annotations

import asyncio
import html
import logging
from typing import List

from core.config import AppSettings
from schemas.booking import BookingRequest, NotificationMessage
from services.communication import MailTransport, MailTransportError
from services.templates import ADMIN_HTML, ADMIN_SUBJECT, CUSTOMER_HTML, CUSTOMER_SUBJECT


logger = logging.getLogger(__name__)


class BookingNotifier:
    """Turns a validated booking into a customer and an admin email.

    Both messages are handed to the transport at the same time and the call
    only returns once both sends have settled. A failure of either send is
    raised as ``MailTransportError`` carrying the transport's error text.
    """

    def __init__(self, settings: AppSettings, transport: MailTransport) -> None:
        self.settings = settings
        self.transport = transport

    def _fields(self, booking: BookingRequest) -> dict[str, str]:
        values = booking.model_dump()
        if self.settings.escape_html:
            values = {k: html.escape(v) for k, v in values.items()}
        return values

    def build_messages(self, booking: BookingRequest) -> List[NotificationMessage]:
        fields = self._fields(booking)
        customer = NotificationMessage(
            sender=self.settings.email_user,
            recipient=booking.email,
            subject=CUSTOMER_SUBJECT,
            html=CUSTOMER_HTML.format(image_url=self.settings.confirmation_image_url, **fields),
        )
        admin = NotificationMessage(
            sender=self.settings.email_user,
            recipient=self.settings.admin_email,
            subject=ADMIN_SUBJECT,
            html=ADMIN_HTML.format(**fields),
        )
        return [customer, admin]

    async def notify(self, booking: BookingRequest) -> None:
        messages = self.build_messages(booking)
        results = await asyncio.gather(
            *(asyncio.to_thread(self.transport.send, m) for m in messages),
            return_exceptions=True,
        )

        errors: List[str] = []
        for message, result in zip(messages, results):
            if isinstance(result, Exception):
                error = str(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                ok, detail = result
                if ok:
                    continue
                error = detail or "unknown mail transport error"
            logger.warning("booking.send_rejected", extra={"to": message.recipient, "error": error})
            errors.append(error)
        if errors:
            raise MailTransportError(errors[0])
