from __future__ import annotations

from fastapi import APIRouter

from api.v1.endpoints import booking as booking_endpoints


api_router = APIRouter()

# Booking notification endpoints
api_router.include_router(booking_endpoints.router)
