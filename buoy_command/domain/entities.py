from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

SUCCEEDED = "Succeeded"
TERMINAL_STATUSES = frozenset({"Succeeded", "Failed", "Canceled"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CommandRequest:
    device_id: str | None
    command: str | None
    recipient_email: str | None
    recipient_display_name: str | None = None


@dataclass(frozen=True)
class CommandOutcome:
    success: bool
    message: str
    error_details: str | None = None
    transaction_id: str | None = None
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def succeeded(cls, message: str, *, transaction_id: str) -> CommandOutcome:
        return cls(success=True, message=message, transaction_id=transaction_id)

    @classmethod
    def failed(
        cls,
        message: str,
        error_details: str,
        *,
        transaction_id: str | None = None,
    ) -> CommandOutcome:
        return cls(
            success=False,
            message=message,
            error_details=error_details,
            transaction_id=transaction_id,
        )


@dataclass(frozen=True)
class EmailAttachment:
    name: str
    content_type: str
    content: bytes


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    recipient_address: str
    recipient_display_name: str
    subject: str
    plain_text: str
    html: str
    attachments: tuple[EmailAttachment, ...] = ()
    correlation_id: str | None = None


@dataclass(frozen=True)
class DeliveryReport:
    status: str
    operation_id: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCEEDED

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
