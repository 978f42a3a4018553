from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from email.utils import formatdate
from typing import Callable, Generator

import httpx

from buoy_command.domain.errors import ConfigurationError


def parse_connection_string(value: str) -> tuple[str, str]:
    """
    Split "endpoint=https://x.communication.azure.com/;accesskey=<base64>"
    into (endpoint without trailing slash, access key).
    """
    parts: dict[str, str] = {}
    for segment in value.split(";"):
        if not segment.strip():
            continue
        key, sep, val = segment.partition("=")
        if not sep:
            raise ConfigurationError(f"malformed connection string segment: {key!r}")
        parts[key.strip().lower()] = val.strip()

    endpoint = parts.get("endpoint")
    access_key = parts.get("accesskey")
    if not endpoint or not access_key:
        raise ConfigurationError(
            "connection string must contain endpoint and accesskey"
        )
    if not endpoint.startswith(("https://", "http://")):
        raise ConfigurationError("connection string endpoint must be an http(s) URL")
    try:
        base64.b64decode(access_key, validate=True)
    except binascii.Error as e:
        raise ConfigurationError("connection string accesskey is not base64") from e

    return endpoint.rstrip("/"), access_key


def content_hash(body: bytes) -> str:
    return base64.b64encode(hashlib.sha256(body).digest()).decode("ascii")


def sign(access_key: str, string_to_sign: str) -> str:
    key = base64.b64decode(access_key)
    digest = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


class AcsHmacAuth(httpx.Auth):
    """HMAC-SHA256 request signing for Azure Communication Services."""

    requires_request_body = True

    def __init__(
        self,
        access_key: str,
        *,
        now: Callable[[], str] = lambda: formatdate(usegmt=True),
    ) -> None:
        self._access_key = access_key
        self._now = now

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        date = self._now()
        body_hash = content_hash(request.content)
        host = request.url.netloc.decode("ascii")
        path_and_query = request.url.raw_path.decode("ascii")

        string_to_sign = (
            f"{request.method}\n{path_and_query}\n{date};{host};{body_hash}"
        )
        signature = sign(self._access_key, string_to_sign)

        request.headers["x-ms-date"] = date
        request.headers["x-ms-content-sha256"] = body_hash
        request.headers["Authorization"] = (
            "HMAC-SHA256 SignedHeaders=x-ms-date;host;x-ms-content-sha256"
            f"&Signature={signature}"
        )
        yield request
