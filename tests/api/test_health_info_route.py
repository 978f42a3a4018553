from buoy_command.presentation.dependencies import get_email_provider
from tests.fakes import FakeErroredEmailProvider


def test_health(client):
    response = client.get("/api/buoy/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Healthy"
    assert body["service"] == "Buoy Command API"
    assert body["timestamp"]


def test_health_ignores_provider_state(client, app_and_provider):
    app, _ = app_and_provider
    app.dependency_overrides[get_email_provider] = lambda: FakeErroredEmailProvider()

    assert client.get("/api/buoy/health").status_code == 200


def test_info_lists_endpoints(client):
    response = client.get("/api/buoy/info")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Buoy Command API"
    assert body["version"] == "1.0.0"
    assert body["description"]
    assert body["timestamp"]
    assert [(e["method"], e["path"]) for e in body["endpoints"]] == [
        ("POST", "/api/buoy/send-command"),
        ("GET", "/api/buoy/health"),
        ("GET", "/api/buoy/info"),
    ]


def test_cors_allows_configured_origin(client):
    response = client.options(
        "/api/buoy/send-command",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_cors_rejects_other_origins(client):
    response = client.get("/api/buoy/health", headers={"Origin": "https://evil.example"})

    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers
