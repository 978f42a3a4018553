from fastapi import Request

from buoy_command.domain.ports.email_provider import EmailProviderPort
from buoy_command.settings import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_email_provider(request: Request) -> EmailProviderPort:
    # This is set in buoy_command.main lifespan()
    return request.app.state.email_provider


def get_sender_email(request: Request) -> str:
    return get_app_settings(request).sender_email
