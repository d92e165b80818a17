"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.constants import DEFAULT_PORT, GRAPH_API_TIMEOUT_SECONDS, GRAPH_API_VERSION


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Missing values are tolerated: an empty token only makes the matching
    handshake or outbound call fail.
    """

    model_config = SettingsConfigDict(
        # Load .env first, then .env.local (for local/test overrides)
        # Later files override earlier ones, so .env.local takes precedence
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # WhatsApp Configuration
    webhook_verify_token: str = Field(
        default="", description="Shared secret for the webhook verification handshake"
    )
    graph_api_token: str = Field(
        default="", description="Bearer token for Graph API calls"
    )
    port: str = Field(default="", description="Listen port, as a string")

    # Graph API Configuration
    graph_api_version: str = Field(
        default=GRAPH_API_VERSION, description="Graph API version segment"
    )
    graph_api_timeout_seconds: float = Field(
        default=GRAPH_API_TIMEOUT_SECONDS,
        description="Timeout for Graph API calls (seconds)",
    )

    # Environment
    env: Literal["local", "railway", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Python logging level")

    # Sentry Configuration
    sentry_dsn: str | None = Field(
        default=None, description="Sentry DSN for error tracking (optional)"
    )
    sentry_traces_sample_rate: float = Field(
        default=1.0, description="Sentry traces sample rate (0.0 to 1.0)"
    )

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for cloud logging"
    )

    def reload_enabled(self) -> bool:
        """Auto-reload only when ENV=local was set explicitly."""
        return "env" in self.model_fields_set and self.env == "local"

    def listen_port(self) -> int:
        """Return the listen port, falling back to DEFAULT_PORT when unset.

        Raises:
            ValueError: If PORT is set but not a valid port number.
        """
        if not self.port.strip():
            return DEFAULT_PORT
        port = int(self.port)
        if not 0 <= port <= 65535:
            raise ValueError(f"PORT out of range: {self.port}")
        return port


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
