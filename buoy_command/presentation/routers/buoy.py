import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from buoy_command.application.send_command import send_buoy_command
from buoy_command.domain.entities import CommandOutcome
from buoy_command.domain.ports.email_provider import EmailProviderPort
from buoy_command.domain.services import validate_command_request
from buoy_command.presentation.dependencies import get_email_provider, get_sender_email
from buoy_command.schemas.requests import BuoyCommandIn
from buoy_command.schemas.responses import (
    CommandOutcomeOut,
    EndpointOut,
    HealthOut,
    InfoOut,
)

logger = logging.getLogger("buoy_command.presentation.routers.buoy")

SERVICE_NAME = "Buoy Command API"
SERVICE_VERSION = "1.0.0"
SERVICE_DESCRIPTION = "API for sending commands to remote buoy systems via email"

ENDPOINTS = (
    EndpointOut(method="POST", path="/api/buoy/send-command", description="Send command to buoy"),
    EndpointOut(method="GET", path="/api/buoy/health", description="Health check"),
    EndpointOut(method="GET", path="/api/buoy/info", description="API information"),
)

router = APIRouter(prefix="/buoy", tags=["Buoy"])


def _respond(outcome: CommandOutcome, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=CommandOutcomeOut.from_outcome(outcome).to_json(),
    )


@router.post(
    "/send-command",
    response_model=CommandOutcomeOut,
    responses={
        400: {"model": CommandOutcomeOut},
        500: {"model": CommandOutcomeOut},
    },
)
async def post_send_command(
    body: BuoyCommandIn,
    provider: Annotated[EmailProviderPort, Depends(get_email_provider)],
    sender_email: Annotated[str, Depends(get_sender_email)],
) -> JSONResponse:
    """Send a command to a buoy as an email with a .sbd attachment."""
    try:
        logger.info("received command request", extra={"imei": body.imei})
        command = body.to_domain()

        rejection = validate_command_request(command)
        if rejection is not None:
            logger.info(
                "command request rejected",
                extra={"imei": body.imei, "errors": rejection.error_details},
            )
            return _respond(rejection, status.HTTP_400_BAD_REQUEST)

        outcome = await send_buoy_command(
            command, provider=provider, sender_email=sender_email
        )
    except Exception as e:
        logger.exception(
            "unexpected error processing command request", extra={"imei": body.imei}
        )
        outcome = CommandOutcome.failed("An unexpected error occurred", str(e))
        return _respond(outcome, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if outcome.success:
        return _respond(outcome, status.HTTP_200_OK)
    return _respond(outcome, status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/health", response_model=HealthOut)
async def get_health() -> HealthOut:
    return HealthOut(timestamp=datetime.now(timezone.utc), service=SERVICE_NAME)


@router.get("/info", response_model=InfoOut)
async def get_info() -> InfoOut:
    return InfoOut(
        name=SERVICE_NAME,
        version=SERVICE_VERSION,
        description=SERVICE_DESCRIPTION,
        endpoints=list(ENDPOINTS),
        timestamp=datetime.now(timezone.utc),
    )
