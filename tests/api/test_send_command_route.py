from datetime import datetime

from buoy_command.domain.services import decode_command_payload
from buoy_command.presentation.dependencies import get_email_provider
from buoy_command.presentation.routers import buoy as buoy_router
from tests.fakes import FakeEmailProvider, FakeErroredEmailProvider

URL = "/api/buoy/send-command"
VALID = {"imei": "123456789012345", "command": "PING", "recipientEmail": "a@b.com"}


def test_send_command_happy_path(client, app_and_provider):
    _, provider = app_and_provider

    response = client.post(URL, json=VALID)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Command sent successfully!"
    assert body["transactionId"]
    assert "errorDetails" not in body
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))

    (message,) = provider.calls
    assert message.sender == "sender@example.com"
    assert message.correlation_id == body["transactionId"]
    assert decode_command_payload(message.attachments[0].content) == "PING"


def test_display_name_from_body(client, app_and_provider):
    _, provider = app_and_provider

    response = client.post(URL, json={**VALID, "recipientDisplayName": "Buoy Ops"})

    assert response.status_code == 200
    assert provider.calls[0].recipient_display_name == "Buoy Ops"


def test_invalid_imei_is_rejected_without_calling_provider(client, app_and_provider):
    _, provider = app_and_provider

    response = client.post(URL, json={**VALID, "imei": "123"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errorDetails"] == "IMEI must be exactly 15 digits"
    assert "transactionId" not in body
    assert provider.calls == []


def test_malformed_email_is_rejected_without_calling_provider(client, app_and_provider):
    _, provider = app_and_provider

    response = client.post(URL, json={**VALID, "recipientEmail": "not-an-email"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errorDetails"] == "Invalid email address format"
    assert provider.calls == []


def test_all_violations_reported_together(client, app_and_provider):
    _, provider = app_and_provider

    response = client.post(URL, json={"imei": "abc", "command": "x" * 501})

    assert response.status_code == 400
    assert response.json()["errorDetails"] == (
        "IMEI must be exactly 15 digits; "
        "IMEI must contain only digits; "
        "Command cannot exceed 500 characters; "
        "Recipient email is required"
    )
    assert provider.calls == []


def test_wrongly_typed_field_is_a_400_not_422(client, app_and_provider):
    _, provider = app_and_provider

    response = client.post(URL, json={**VALID, "imei": 123456789012345})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert "imei" in body["errorDetails"]
    assert provider.calls == []


def test_missing_body_is_a_400(client):
    response = client.post(URL)

    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


def test_provider_non_success_status(client, app_and_provider):
    app, _ = app_and_provider
    app.dependency_overrides[get_email_provider] = lambda: FakeEmailProvider(
        status="RateLimited"
    )

    response = client.post(URL, json=VALID)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Failed to send command"
    assert "RateLimited" in body["errorDetails"]
    assert body["transactionId"]


def test_provider_transport_fault(client, app_and_provider):
    app, _ = app_and_provider
    app.dependency_overrides[get_email_provider] = lambda: FakeErroredEmailProvider(
        "Email provider HTTP error: boom"
    )

    response = client.post(URL, json=VALID)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "An error occurred while sending the command"
    assert body["errorDetails"] == "Email provider HTTP error: boom"
    assert body["transactionId"]


def test_unexpected_fault_at_boundary(client, monkeypatch):
    async def exploding(*args, **kwargs):
        raise RuntimeError("relay exploded")

    monkeypatch.setattr(buoy_router, "send_buoy_command", exploding)

    response = client.post(URL, json=VALID)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "An unexpected error occurred"
    assert body["errorDetails"] == "relay exploded"
    assert "Traceback" not in response.text


def test_resubmission_is_not_deduplicated(client, app_and_provider):
    _, provider = app_and_provider

    first = client.post(URL, json=VALID).json()
    second = client.post(URL, json=VALID).json()

    assert first["transactionId"] != second["transactionId"]
    assert len(provider.calls) == 2
