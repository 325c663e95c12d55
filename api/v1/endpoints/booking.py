from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from schemas.booking import BookingErrorResponse, BookingRequest, BookingSuccessResponse
from services.communication import MailTransportError
from services.notifier import BookingNotifier


logger = logging.getLogger(__name__)
router = APIRouter(tags=["booking"])

SUCCESS_MESSAGE = "✅ Emails sent successfully!"
VALIDATION_ERROR_MESSAGE = "❌ All fields are required."
SEND_FAILURE_PREFIX = "❌ Failed to send emails. "


def get_notifier(request: Request) -> BookingNotifier:
    return request.app.state.notifier


async def _read_payload(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        # Malformed or empty body is reported like a missing field
        return None


@router.post(
    "/send-mail",
    response_model=BookingSuccessResponse,
    responses={400: {"model": BookingErrorResponse}, 500: {"model": BookingErrorResponse}},
)
async def send_mail(request: Request, notifier: BookingNotifier = Depends(get_notifier)):
    payload = await _read_payload(request)
    logger.info("booking.received", extra={"payload": payload})

    try:
        booking = BookingRequest.model_validate(payload)
    except ValidationError as exc:
        missing = [str(err["loc"][0]) for err in exc.errors() if err["loc"]]
        logger.warning("booking.validation_failed", extra={"fields": missing})
        return JSONResponse(status_code=400, content={"error": VALIDATION_ERROR_MESSAGE})

    try:
        await notifier.notify(booking)
    except MailTransportError as exc:
        logger.error("booking.mail_failed", extra={"error": str(exc)})
        return JSONResponse(status_code=500, content={"error": SEND_FAILURE_PREFIX + str(exc)})

    logger.info("booking.mail_sent", extra={"to": booking.email})
    return BookingSuccessResponse(message=SUCCESS_MESSAGE)
