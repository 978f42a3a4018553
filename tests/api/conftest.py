import pytest
from fastapi.testclient import TestClient

from buoy_command.main import create_app
from buoy_command.presentation.dependencies import get_email_provider
from tests.fakes import FakeEmailProvider, make_settings


@pytest.fixture()
def app_and_provider():
    app = create_app(make_settings())
    provider = FakeEmailProvider()

    app.dependency_overrides[get_email_provider] = lambda: provider

    try:
        yield app, provider
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_provider):
    app, _ = app_and_provider
    return TestClient(app, raise_server_exceptions=False)
