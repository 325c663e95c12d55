from __future__ import annotations

# Re-export key service classes for convenient imports
from .communication import EmailService, MailTransport, MailTransportError, build_transport
from .notifier import BookingNotifier

__all__ = ["BookingNotifier", "EmailService", "MailTransport", "MailTransportError", "build_transport"]
