"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifyhub.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used for timestamps and template date formatting",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    templates_path: str | None = Field(
        default=None,
        description="Directory holding notification templates; defaults to the bundled ones",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending notification emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification emails",
        min_length=3,
    )
    sms_gateway_url: str | None = Field(
        default=None, description="Endpoint of the HTTP gateway delivering SMS messages"
    )
    sms_gateway_token: str | None = Field(
        default=None, description="Bearer token presented to the SMS gateway"
    )
    sms_sender: str | None = Field(
        default=None, description="Sender id or phone number shown to SMS recipients"
    )
    push_gateway_url: str | None = Field(
        default=None, description="Endpoint of the HTTP gateway delivering push messages"
    )
    push_gateway_token: str | None = Field(
        default=None, description="Bearer token presented to the push gateway"
    )
    provider_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP timeout applied to SMS and push gateway calls",
        gt=0,
    )
    channel_send_timeout_seconds: float | None = Field(
        default=None,
        description="Optional deadline for a single channel delivery attempt",
        gt=0,
    )
    notification_retention_days: int = Field(
        default=30,
        description="Notifications older than this many days are removed by the cleanup job",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @property
    def email_enabled(self) -> bool:
        return bool(self.sendgrid_api_key and self.sendgrid_sender)

    @property
    def sms_enabled(self) -> bool:
        return bool(self.sms_gateway_url)

    @property
    def push_enabled(self) -> bool:
        return bool(self.push_gateway_url)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
