from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"
    https_redirect: bool = False
    cors_origins: list[str] = [
        "http://localhost:3000",
        "https://zealous-water-0d99f0a0f.2.azurestaticapps.net",
    ]

    # Email provider (Azure Communication Services)
    azure_communication_connection_string: str | None = None
    sender_email: str = "donotreply@your-verified-domain.azurecomm.net"
    email_api_version: str = "2023-03-31"

    # Timeouts
    provider_timeout_seconds: float = 10.0
    delivery_timeout_seconds: float = 60.0
    delivery_poll_interval_seconds: float = 1.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
