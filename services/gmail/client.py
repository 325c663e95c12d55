from __future__ import annotations

import os
from typing import Any

from googleapiclient.discovery import build
from google.oauth2.credentials import Credentials


GMAIL_SCOPES = [
    "https://www.googleapis.com/auth/gmail.send",
    "https://www.googleapis.com/auth/gmail.readonly",
]


def load_credentials(token_path: str) -> Credentials:
    if not os.path.exists(token_path):
        raise RuntimeError(f"Google token file not found: {token_path}")
    creds = Credentials.from_authorized_user_file(token_path, scopes=GMAIL_SCOPES)
    return creds


def build_gmail_service(token_path: str) -> Any:
    creds = load_credentials(token_path)
    service = build("gmail", "v1", credentials=creds, cache_discovery=False)
    return service
