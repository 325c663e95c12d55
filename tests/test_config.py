"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pydantic
import pytest

from core.config import AppSettings, CONFIRMATION_IMAGE_URL, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


REQUIRED = {
    "EMAIL_USER": "salon@example.com",
    "EMAIL_PASS": "app-password",
    "ADMIN_EMAIL": "admin@example.com",
}


def test_settings_defaults():
    with patch.dict(os.environ, REQUIRED, clear=True):
        settings = get_settings()
        assert settings.port == 5000
        assert settings.mail_transport == "smtp"
        assert settings.smtp_host == "smtp.gmail.com"
        assert settings.smtp_port == 587
        assert settings.allowed_origins == "*"
        assert settings.confirmation_image_url == CONFIRMATION_IMAGE_URL
        assert settings.escape_html is False


def test_port_string_coercion():
    with patch.dict(os.environ, {**REQUIRED, "PORT": "8080"}, clear=True):
        settings = get_settings()
        assert settings.port == 8080


@pytest.mark.parametrize("missing", ["EMAIL_USER", "EMAIL_PASS", "ADMIN_EMAIL"])
def test_missing_required_variable_fails(missing):
    env = {k: v for k, v in REQUIRED.items() if k != missing}
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(pydantic.ValidationError):
            AppSettings()


def test_empty_required_variable_fails():
    with patch.dict(os.environ, {**REQUIRED, "ADMIN_EMAIL": ""}, clear=True):
        with pytest.raises(pydantic.ValidationError):
            AppSettings()


def test_gmail_api_transport_does_not_need_password():
    env = {"EMAIL_USER": "salon@example.com", "ADMIN_EMAIL": "admin@example.com", "MAIL_TRANSPORT": "gmail_api"}
    with patch.dict(os.environ, env, clear=True):
        settings = AppSettings()
        assert settings.email_pass is None
        assert settings.google_token_file == "token.json"


def test_settings_are_immutable():
    with patch.dict(os.environ, REQUIRED, clear=True):
        settings = get_settings()
        with pytest.raises(pydantic.ValidationError):
            settings.port = 1234  # type: ignore[misc]
