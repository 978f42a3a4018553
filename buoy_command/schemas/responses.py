from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from buoy_command.domain.entities import CommandOutcome


class CommandOutcomeOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    message: str
    error_details: str | None = None
    timestamp: datetime
    transaction_id: str | None = None

    @classmethod
    def from_outcome(cls, outcome: CommandOutcome) -> "CommandOutcomeOut":
        return cls(
            success=outcome.success,
            message=outcome.message,
            error_details=outcome.error_details,
            timestamp=outcome.timestamp,
            transaction_id=outcome.transaction_id,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class HealthOut(BaseModel):
    status: Literal["Healthy"] = "Healthy"
    timestamp: datetime
    service: str


class EndpointOut(BaseModel):
    method: str
    path: str
    description: str


class InfoOut(BaseModel):
    name: str
    version: str
    description: str
    endpoints: list[EndpointOut]
    timestamp: datetime
