import pytest

from buoy_command.domain.entities import CommandRequest
from tests.fakes import FakeEmailProvider, FakeErroredEmailProvider

VALID_IMEI = "123456789012345"


@pytest.fixture()
def valid_request() -> CommandRequest:
    return CommandRequest(
        device_id=VALID_IMEI,
        command="PING",
        recipient_email="a@b.com",
    )


@pytest.fixture()
def provider():
    return FakeEmailProvider()


@pytest.fixture()
def provider_rate_limited():
    return FakeEmailProvider(status="RateLimited")


@pytest.fixture()
def provider_errored():
    return FakeErroredEmailProvider()
