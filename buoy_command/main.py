import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware

from buoy_command.domain.errors import ConfigurationError
from buoy_command.infrastructure.email.acs_email_adapter import AcsEmailAdapter
from buoy_command.logging import setup_logging
from buoy_command.presentation.api import api
from buoy_command.presentation.exception_handlers import request_validation_handler
from buoy_command.presentation.routers.buoy import SERVICE_NAME, SERVICE_VERSION
from buoy_command.settings import Settings, get_settings

logger = logging.getLogger("buoy_command.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # fail fast: no credential, no traffic
    if not settings.azure_communication_connection_string:
        raise ConfigurationError(
            "Azure Communication Services connection string is not configured"
        )

    async with httpx.AsyncClient(timeout=settings.provider_timeout_seconds) as client:
        # ONE provider adapter shared by every request; it never mutates after this
        email_provider = AcsEmailAdapter(
            settings.azure_communication_connection_string,
            client=client,
            api_version=settings.email_api_version,
            delivery_timeout=settings.delivery_timeout_seconds,
            poll_interval=settings.delivery_poll_interval_seconds,
        )
        app.state.email_provider = email_provider
        logger.info(
            "email provider ready",
            extra={"endpoint": email_provider.endpoint, "sender": settings.sender_email},
        )
        yield


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    dev = settings.app_env == "dev"
    app = FastAPI(
        title=SERVICE_NAME,
        version=SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/swagger" if dev else None,
        redoc_url=None,
        openapi_url="/openapi.json" if dev else None,
    )
    app.state.settings = settings

    if settings.https_redirect:
        app.add_middleware(HTTPSRedirectMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(api)
    return app


app = create_app()
