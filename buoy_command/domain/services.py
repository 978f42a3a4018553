# buoy_command/domain/services.py
from __future__ import annotations

import re

from email_validator import EmailNotValidError, validate_email

from buoy_command.domain.entities import CommandOutcome, CommandRequest

IMEI_LENGTH = 15
MAX_COMMAND_LENGTH = 500
PAYLOAD_ENCODING = "utf-8"

_NON_DIGIT = re.compile(r"[^0-9]")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_email(value: str) -> bool:
    """
    Syntax-only check: local@domain with at least one dot in the domain.
    No DNS lookups; special-use domains (.local, .test, ...) are accepted.
    """
    try:
        result = validate_email(
            value, check_deliverability=False, globally_deliverable=False
        )
    except EmailNotValidError:
        return False
    return "." in result.ascii_domain


def collect_violations(request: CommandRequest) -> list[str]:
    """
    Check every field independently and return all violation messages,
    in field order. An empty list means the request is valid.
    """
    errors: list[str] = []

    if _is_blank(request.device_id):
        errors.append("IMEI is required")
    else:
        if len(request.device_id) != IMEI_LENGTH:
            errors.append("IMEI must be exactly 15 digits")
        if _NON_DIGIT.search(request.device_id):
            errors.append("IMEI must contain only digits")

    if _is_blank(request.command):
        errors.append("Command is required")
    elif len(request.command) > MAX_COMMAND_LENGTH:
        errors.append("Command cannot exceed 500 characters")

    if _is_blank(request.recipient_email):
        errors.append("Recipient email is required")
    elif not is_valid_email(request.recipient_email):
        errors.append("Invalid email address format")

    return errors


def validate_command_request(request: CommandRequest) -> CommandOutcome | None:
    """Return a failed outcome if the request is invalid, else None."""
    errors = collect_violations(request)
    if not errors:
        return None
    return CommandOutcome.failed("Validation failed", "; ".join(errors))


def encode_command_payload(command: str) -> bytes:
    """Raw bytes of the .sbd attachment."""
    return command.encode(PAYLOAD_ENCODING)


def decode_command_payload(payload: bytes) -> str:
    return payload.decode(PAYLOAD_ENCODING)
