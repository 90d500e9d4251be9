"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.entities import ReminderPolicy

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    jwt_secret: str = Field(
        default="",
        description="Secret used by the identity provider to sign access tokens",
    )
    jwt_audience: str = Field(
        default="authenticated",
        description="Audience claim expected in identity provider access tokens",
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone in which event dates and times are expressed",
    )
    site_url: str = Field(
        default="https://event-finder.app",
        description="Public URL of the web application, used in email links",
    )
    service_role_key: str | None = Field(
        default=None,
        description="Bearer token required by scheduler and dispatcher endpoints",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    email_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Upper bound for a single email API request",
    )
    identity_provider_url: str | None = Field(
        default=None,
        description="Base URL of the identity provider (auth server)",
    )
    identity_provider_anon_key: str | None = Field(
        default=None,
        description="Public API key sent to the identity provider",
    )
    identity_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Upper bound for the authorization code exchange request",
    )
    auth_code_verifier_cookie: str = Field(
        default="auth-code-verifier",
        description="Cookie holding the PKCE code verifier set by the login page",
    )
    reminder_lookahead_days: int = Field(
        default=2,
        ge=1,
        description="How many days ahead the reminder scheduler scans for events",
    )
    reminder_cadence_minutes: int = Field(
        default=15,
        gt=0,
        description="Interval at which the external timer runs the reminder scheduler",
    )
    notification_retention_days: int = Field(
        default=30,
        gt=0,
        description="Read notifications older than this are deleted by the retention sweep",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_sender(self) -> "Settings":
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @model_validator(mode="after")
    def _validate_reminder_cadence(self) -> "Settings":
        self.reminder_policy()
        return self

    def reminder_policy(self) -> ReminderPolicy:
        """Return the reminder policy for the configured lookahead and cadence.

        :raises ValueError: the cadence is wider than the narrowest window.
        """

        return ReminderPolicy(
            lookahead_days=self.reminder_lookahead_days,
            cadence_minutes=self.reminder_cadence_minutes,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
