from __future__ import annotations

from typing import Protocol

from buoy_command.domain.entities import DeliveryReport, OutboundEmail


class EmailProviderPort(Protocol):
    async def send(self, message: OutboundEmail) -> DeliveryReport:
        """
        Submit one email and wait for the provider to report a status.
        Raises ProviderError on transport faults or provider rejection.
        """
