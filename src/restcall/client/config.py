"""Configuration for restcall clients."""

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RestCallConfig(BaseSettings):
    """Configuration for restcall clients.

    All settings can be configured via environment variables with RESTCALL_ prefix.

    Target:
        - RESTCALL_BASE_URL: Base address every relative path is joined to
        - RESTCALL_CONTRACTS_FILE: JSON file with operation descriptions (CLI)

    OAuth (client credentials, applied by the HTTP transport):
        - RESTCALL_OAUTH_*: token endpoint and client credentials
    """

    model_config = SettingsConfigDict(
        env_prefix="RESTCALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:8000",
        validation_alias=AliasChoices("base_url", "RESTCALL_BASE_URL", "RESTCALL_URL"),
    )
    timeout: float = Field(default=30.0, ge=1.0, le=300.0)
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for connection/timeout failures in the HTTP transport",
    )

    contracts_file: Path | None = Field(
        default=None,
        description="JSON file describing the operations of an API",
    )

    # OAuth settings (for HTTP transport)
    oauth_client_id: str | None = Field(default=None)
    oauth_client_secret: str | None = Field(default=None)
    oauth_token_url: str | None = Field(default=None)
    oauth_scope: str | None = Field(default=None)

    log_level: str = Field(default="INFO")

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format and strip trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @property
    def oauth_enabled(self) -> bool:
        """Check if OAuth is configured for HTTP transport."""
        return all([
            self.oauth_client_id,
            self.oauth_client_secret,
            self.oauth_token_url,
        ])
