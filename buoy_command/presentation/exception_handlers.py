from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from buoy_command.domain.entities import CommandOutcome
from buoy_command.schemas.responses import CommandOutcomeOut


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Bodies that are not JSON objects, or carry non-string fields, get the
    same 400 outcome shape as field-level validation failures.
    """
    errors = [f"{err['loc'][-1]}: {err['msg']}" for err in exc.errors()]
    outcome = CommandOutcome.failed("Validation failed", "; ".join(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=CommandOutcomeOut.from_outcome(outcome).to_json(),
    )
