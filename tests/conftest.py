"""Shared test fixtures for the booking notifier."""

import os
import threading
from typing import List, Optional, Tuple

import pytest
from httpx import ASGITransport, AsyncClient

# main builds an app at import time, so the required settings must exist first
os.environ.setdefault("EMAIL_USER", "salon@example.com")
os.environ.setdefault("EMAIL_PASS", "app-password")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")

from core.config import AppSettings  # noqa: E402
from main import create_app  # noqa: E402
from schemas.booking import NotificationMessage  # noqa: E402


ADMIN_EMAIL = "admin@example.com"

VALID_BOOKING = {
    "Name": "Jane",
    "Email": "jane@x.com",
    "Mobile": "555",
    "Date": "2024-05-01",
    "Time": "10:00",
    "Service": "Haircut",
}


class RecordingTransport:
    """In-memory transport that records every send and can fail per recipient."""

    def __init__(self, fail_for: Optional[dict] = None, barrier: Optional[threading.Barrier] = None) -> None:
        self.fail_for = fail_for or {}
        self.barrier = barrier
        self.sent: List[NotificationMessage] = []
        self.verified = False
        self.verify_result: Tuple[bool, Optional[str]] = (True, None)
        self._lock = threading.Lock()

    def verify(self) -> Tuple[bool, Optional[str]]:
        self.verified = True
        return self.verify_result

    def send(self, message: NotificationMessage) -> Tuple[bool, Optional[str]]:
        with self._lock:
            self.sent.append(message)
        if self.barrier is not None:
            # Only passes if the other send is in flight at the same time
            self.barrier.wait()
        failure = self.fail_for.get(message.recipient)
        if isinstance(failure, Exception):
            raise failure
        if failure:
            return False, failure
        return True, f"<{len(self.sent)}@test>"


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        EMAIL_USER="salon@example.com",
        EMAIL_PASS="app-password",
        ADMIN_EMAIL=ADMIN_EMAIL,
    )


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def app(settings, transport):
    return create_app(settings=settings, transport=transport)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
