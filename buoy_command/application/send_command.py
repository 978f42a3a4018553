import logging
import uuid
from datetime import datetime, timezone
from html import escape

from buoy_command.domain.entities import (
    CommandOutcome,
    CommandRequest,
    EmailAttachment,
    OutboundEmail,
)
from buoy_command.domain.ports.email_provider import EmailProviderPort
from buoy_command.domain.services import encode_command_payload

logger = logging.getLogger("buoy_command.application.send_command")

ATTACHMENT_NAME = "command.sbd"
ATTACHMENT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_DISPLAY_NAME = "Command Receiver"


def new_transaction_id() -> str:
    return str(uuid.uuid4())


def build_command_email(
    request: CommandRequest,
    *,
    sender_email: str,
    transaction_id: str,
    sent_at: datetime,
) -> OutboundEmail:
    payload = encode_command_payload(request.command)
    stamp = sent_at.strftime("%Y-%m-%d %H:%M:%S") + " UTC"

    plain_text = (
        f"Attached is the command for IMEI {request.device_id}.\n\n"
        f"Command: {request.command}\n"
        f"Timestamp: {stamp}\n"
        f"Transaction ID: {transaction_id}"
    )
    html = (
        "<html><body>"
        f"<h3>{escape(request.device_id)}</h3>"
        f"<p><strong>Command:</strong> {escape(request.command)}</p>"
        f"<p><strong>Timestamp:</strong> {stamp}</p>"
        f"<p><strong>Transaction ID:</strong> {transaction_id}</p>"
        "</body></html>"
    )

    return OutboundEmail(
        sender=sender_email,
        recipient_address=request.recipient_email,
        recipient_display_name=request.recipient_display_name or DEFAULT_DISPLAY_NAME,
        subject=request.device_id,
        plain_text=plain_text,
        html=html,
        attachments=(
            EmailAttachment(
                name=ATTACHMENT_NAME,
                content_type=ATTACHMENT_CONTENT_TYPE,
                content=payload,
            ),
        ),
        correlation_id=transaction_id,
    )


async def send_buoy_command(
    request: CommandRequest,
    *,
    provider: EmailProviderPort,
    sender_email: str,
) -> CommandOutcome:
    """
    Make exactly one delivery attempt for an already-validated request.
    Never raises: provider statuses and faults are mapped to an outcome that
    always carries the transaction id.
    """
    transaction_id = new_transaction_id()
    log_extra = {"imei": request.device_id, "transaction_id": transaction_id}

    try:
        logger.info("processing buoy command", extra=log_extra)

        message = build_command_email(
            request,
            sender_email=sender_email,
            transaction_id=transaction_id,
            sent_at=datetime.now(timezone.utc),
        )
        report = await provider.send(message)

        if report.succeeded:
            logger.info("email sent", extra=log_extra)
            return CommandOutcome.succeeded(
                "Command sent successfully!", transaction_id=transaction_id
            )

        logger.error(
            "email sending failed", extra={**log_extra, "status": report.status}
        )
        return CommandOutcome.failed(
            "Failed to send command",
            f"Email sending failed. Status: {report.status}",
            transaction_id=transaction_id,
        )
    except Exception as e:
        logger.exception("error sending buoy command", extra=log_extra)
        return CommandOutcome.failed(
            "An error occurred while sending the command",
            str(e),
            transaction_id=transaction_id,
        )
