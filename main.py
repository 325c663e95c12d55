from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from logging.config import dictConfig
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from api.v1.router import api_router
from core.config import AppSettings, get_settings
from services.communication import MailTransport, build_transport
from services.notifier import BookingNotifier


def configure_logging() -> None:
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                    "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "level": "INFO",
                }
            },
            "root": {"handlers": ["console"], "level": "INFO"},
        }
    )


configure_logging()
logger = logging.getLogger(__name__)


def load_settings() -> AppSettings:
    try:
        return get_settings()
    except ValidationError as exc:
        fields = [".".join(str(p) for p in err["loc"]) or err["msg"] for err in exc.errors()]
        logger.critical("config.missing_required", extra={"fields": fields})
        raise SystemExit(1) from exc


async def verify_transport(app: FastAPI) -> None:
    ok, error = await asyncio.to_thread(app.state.transport.verify)
    if ok:
        logger.info("mail.transport_ready", extra={"transport": app.state.settings.mail_transport})
    else:
        logger.error("mail.transport_error", extra={"error": error})


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Connectivity is only reported; requests are served while the check runs
    app.state.verify_task = asyncio.create_task(verify_transport(app))
    yield
    app.state.verify_task.cancel()


def create_app(
    settings: Optional[AppSettings] = None,
    transport: Optional[MailTransport] = None,
) -> FastAPI:
    settings = settings or load_settings()
    transport = transport or build_transport(settings)

    logger.info(
        "server.starting",
        extra={
            "email_user": settings.email_user,
            "admin_email": settings.admin_email,
            "port": settings.port,
            "transport": settings.mail_transport,
        },
    )

    app = FastAPI(title="Booking Notifier", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.transport = transport
    app.state.notifier = BookingNotifier(settings, transport)

    origins_env = settings.allowed_origins.strip()
    allow_all_origins = origins_env in {"*", '"*"'}
    if allow_all_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        allowed_origins = [o.strip() for o in origins_env.split(",") if o.strip()]
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(api_router)

    @app.get("/")
    async def root_health() -> dict[str, str]:
        return {"status": "ok"}

    logger.info("Application initialized")
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
