from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _is_blank(value: Any) -> bool:
    # Empty lists and objects count as present, like any other non-empty JSON value
    if isinstance(value, (list, dict)):
        return False
    return not value


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, list):
        return ",".join(_as_text(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


class BookingRequest(BaseModel):
    # Keys arrive capitalised from the booking form; only truthiness is checked.
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    email: str = Field(alias="Email")
    mobile: str = Field(alias="Mobile")
    date: str = Field(alias="Date")
    time: str = Field(alias="Time")
    service: str = Field(alias="Service")

    @field_validator("name", "email", "mobile", "date", "time", "service", mode="before")
    @classmethod
    def _reject_falsy(cls, value: Any) -> str:
        if _is_blank(value):
            raise ValueError("field is required")
        # Any other truthy JSON value is accepted as its text form
        return value if isinstance(value, str) else _as_text(value)


class NotificationMessage(BaseModel):
    sender: str
    recipient: str
    subject: str
    html: str


class BookingSuccessResponse(BaseModel):
    message: str


class BookingErrorResponse(BaseModel):
    error: str
