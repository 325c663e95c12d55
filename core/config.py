from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


load_dotenv()


CONFIRMATION_IMAGE_URL = (
    "https://lh3.googleusercontent.com/p/"
    "AF1QipNHwczy8exThH7v40O4KrD9j5CMXqidK6NZkcpG=s680-w680-h510"
)


class AppSettings(BaseSettings):
    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    # Mail account (sender identity + secret)
    email_user: str = Field(alias="EMAIL_USER", min_length=1)
    email_pass: Optional[str] = Field(default=None, alias="EMAIL_PASS")
    admin_email: str = Field(alias="ADMIN_EMAIL", min_length=1)

    port: int = Field(default=5000, alias="PORT")
    allowed_origins: str = Field(default="*", alias="ALLOWED_ORIGINS")

    # Transport selection
    mail_transport: Literal["smtp", "gmail_api"] = Field(default="smtp", alias="MAIL_TRANSPORT")
    smtp_host: str = Field(default="smtp.gmail.com", alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_timeout: float = Field(default=30.0, alias="SMTP_TIMEOUT")

    # Gmail REST API (only used when MAIL_TRANSPORT=gmail_api)
    google_token_file: str = Field(default="token.json", alias="GOOGLE_TOKEN_FILE")

    # Message composition
    confirmation_image_url: str = Field(default=CONFIRMATION_IMAGE_URL, alias="CONFIRMATION_IMAGE_URL")
    escape_html: bool = Field(default=False, alias="EMAIL_ESCAPE_HTML")

    @model_validator(mode="after")
    def _require_smtp_password(self) -> "AppSettings":
        if self.mail_transport == "smtp" and not self.email_pass:
            raise ValueError("EMAIL_PASS is required when MAIL_TRANSPORT=smtp")
        return self


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
