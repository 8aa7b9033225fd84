"""Relay configuration using pydantic-settings.

This module defines the RelaySettings class that reads configuration from
environment variables (or a local ``.env`` file). The variable names are
unprefixed so existing deployments keep working:

- GITHUB_WEBHOOK_SECRET: shared secret used to sign webhook payloads
- DISCORD_WEBHOOK_URL: Discord channel webhook that receives the messages
- PORT / HOST: where the HTTP listener binds
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Discord rejects messages carrying more than 10 embeds
DISCORD_MAX_EMBEDS = 10


class RelaySettings(BaseSettings):
    """Relay configuration from environment variables.

    Required fields (must be set via environment variables):
    - github_webhook_secret: Secret for validating GitHub webhook signatures
    - discord_webhook_url: Discord webhook URL that receives relayed messages

    The settings object is built once at startup and handed to the
    components that need it; nothing else reads the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # GitHub Configuration
    # -------------------------------------------------------------------------
    github_webhook_secret: str

    # -------------------------------------------------------------------------
    # Discord Configuration
    # -------------------------------------------------------------------------
    discord_webhook_url: str

    # Timeout in seconds for the outbound Discord call
    delivery_timeout_seconds: float = 10.0

    # Number of commits rendered as embeds for a single push
    max_commit_embeds: int = DISCORD_MAX_EMBEDS

    # -------------------------------------------------------------------------
    # Server Configuration
    # -------------------------------------------------------------------------
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("github_webhook_secret")
    @classmethod
    def validate_webhook_secret(cls, v: str) -> str:
        """Validate that webhook secret is not empty."""
        if not v or not v.strip():
            raise ValueError("github_webhook_secret cannot be empty")
        return v

    @field_validator("discord_webhook_url")
    @classmethod
    def validate_discord_webhook_url(cls, v: str) -> str:
        """Validate that the Discord webhook URL is an http(s) URL."""
        if not v or not v.strip():
            raise ValueError("discord_webhook_url cannot be empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError("discord_webhook_url must start with http:// or https://")
        return v.strip()

    @field_validator("delivery_timeout_seconds")
    @classmethod
    def validate_delivery_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("delivery_timeout_seconds must be positive")
        return v

    @field_validator("max_commit_embeds")
    @classmethod
    def validate_max_commit_embeds(cls, v: int) -> int:
        if not 1 <= v <= DISCORD_MAX_EMBEDS:
            raise ValueError(
                f"max_commit_embeds must be between 1 and {DISCORD_MAX_EMBEDS}"
            )
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log_level: {v}")
        return level


def get_settings() -> RelaySettings:
    """Create and return a RelaySettings instance.

    Returns:
        RelaySettings: Configured settings instance.

    Raises:
        pydantic.ValidationError: If required fields are missing or invalid.
    """
    return RelaySettings()
