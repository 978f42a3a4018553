from pydantic import BaseModel, ConfigDict, Field

from buoy_command.domain.entities import CommandRequest


class BuoyCommandIn(BaseModel):
    # Constraint checks live in domain.services; all violations are
    # reported together, so fields accept any string.
    model_config = ConfigDict(populate_by_name=True)

    imei: str | None = Field(None, description="15-digit modem IMEI")
    command: str | None = Field(None, description="Command text, up to 500 chars")
    recipient_email: str | None = Field(None, alias="recipientEmail")
    recipient_display_name: str | None = Field(None, alias="recipientDisplayName")

    def to_domain(self) -> CommandRequest:
        return CommandRequest(
            device_id=self.imei,
            command=self.command,
            recipient_email=self.recipient_email,
            recipient_display_name=self.recipient_display_name,
        )
