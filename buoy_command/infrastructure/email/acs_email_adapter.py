from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from buoy_command.domain.entities import DeliveryReport, OutboundEmail
from buoy_command.domain.errors import ProviderError
from buoy_command.domain.ports.email_provider import EmailProviderPort
from buoy_command.infrastructure.email.hmac_auth import (
    AcsHmacAuth,
    parse_connection_string,
)

logger = logging.getLogger("buoy_command.infrastructure.email.acs_email_adapter")


class AcsEmailAdapter(EmailProviderPort):
    """
    Sends mail through the Azure Communication Services Email REST API and
    waits (by polling the operation) until the provider reports a terminal
    status or delivery_timeout elapses.
    """

    def __init__(
        self,
        connection_string: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        api_version: str = "2023-03-31",
        delivery_timeout: float = 60.0,
        poll_interval: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._endpoint, access_key = parse_connection_string(connection_string)
        self._auth = AcsHmacAuth(access_key)
        self._api_version = api_version
        self._delivery_timeout = delivery_timeout
        self._poll_interval = poll_interval
        self._sleep = sleep
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send(self, message: OutboundEmail) -> DeliveryReport:
        headers: Dict[str, str] = {}
        if message.correlation_id:
            headers["x-ms-client-request-id"] = message.correlation_id

        url = f"{self._endpoint}/emails:send"
        params = {"api-version": self._api_version}

        try:
            resp = await self._client.post(
                url,
                params=params,
                json=self._to_payload(message),
                headers=headers,
                auth=self._auth,
            )
            self._raise_for_status(resp)
            report = self._to_report(resp)
            operation_url = resp.headers.get("Operation-Location")
            if not operation_url and not report.is_terminal:
                if not report.operation_id:
                    raise ProviderError("Email provider returned no operation id")
                operation_url = (
                    f"{self._endpoint}/emails/operations/{report.operation_id}"
                    f"?api-version={self._api_version}"
                )

            loop = asyncio.get_running_loop()
            deadline = loop.time() + self._delivery_timeout
            while not report.is_terminal:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    logger.warning(
                        "delivery did not complete in time",
                        extra={
                            "operation_id": report.operation_id,
                            "status": report.status,
                        },
                    )
                    break
                await self._sleep(min(self._retry_after(resp), remaining))
                resp = await self._client.get(operation_url, auth=self._auth)
                self._raise_for_status(resp)
                report = self._to_report(resp)
        except httpx.HTTPError as e:
            raise ProviderError(f"Email provider HTTP error: {e}") from e

        if report.error:
            logger.warning(
                "provider reported an error",
                extra={"operation_id": report.operation_id, "error": report.error},
            )
        return report

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def _to_payload(message: OutboundEmail) -> Dict[str, Any]:
        return {
            "senderAddress": message.sender,
            "content": {
                "subject": message.subject,
                "plainText": message.plain_text,
                "html": message.html,
            },
            "recipients": {
                "to": [
                    {
                        "address": message.recipient_address,
                        "displayName": message.recipient_display_name,
                    }
                ]
            },
            "attachments": [
                {
                    "name": a.name,
                    "contentType": a.content_type,
                    "contentInBase64": base64.b64encode(a.content).decode("ascii"),
                }
                for a in message.attachments
            ],
        }

    @staticmethod
    def _raise_for_status(resp: httpx.Response) -> None:
        if not (200 <= resp.status_code < 300):
            text = resp.text[:200]
            raise ProviderError(f"Email provider responded {resp.status_code}: {text}")

    @staticmethod
    def _to_report(resp: httpx.Response) -> DeliveryReport:
        try:
            body = resp.json()
        except ValueError as e:
            raise ProviderError("Email provider returned a non-JSON body") from e
        if not isinstance(body, dict):
            raise ProviderError("Email provider returned an unexpected body")

        error = body.get("error") or None
        if isinstance(error, dict):
            error = f"{error.get('code')}: {error.get('message')}"
        return DeliveryReport(
            status=str(body.get("status", "Unknown")),
            operation_id=body.get("id"),
            error=error,
        )

    def _retry_after(self, resp: httpx.Response) -> float:
        value = resp.headers.get("Retry-After")
        try:
            return max(float(value), 0.0) if value is not None else self._poll_interval
        except ValueError:
            return self._poll_interval
