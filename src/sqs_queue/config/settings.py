"""
Module: settings.py
Description: Client configuration using pydantic-settings.

Loads credentials, region and transport options from SQS_* environment
variables (or a .env file) with validation and defaults. The signing
and transport pipeline never reads the environment itself; Settings is
turned into an Auth/Region context and an Executor by SQS.from_settings().
"""

from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sqs_queue.models.context import Auth, Region, get_region


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SQS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Credentials
    access_key_id: str = Field(default="", description="Access key id")
    secret_access_key: SecretStr = Field(
        default=SecretStr(""),
        description="Secret access key"
    )
    security_token: Optional[str] = Field(
        default=None,
        description="Optional session token"
    )

    # Endpoint settings
    region: str = Field(default="us-east-1", description="Region name")
    endpoint: Optional[str] = Field(
        default=None,
        description="Explicit queue-service endpoint, overrides the region's"
    )

    # Transport settings
    timeout: float = Field(
        default=10.0,
        gt=0,
        le=300,
        description="HTTP timeout in seconds for each request"
    )
    debug: bool = Field(
        default=False,
        description="Log request and response payloads"
    )

    @field_validator("region")
    @classmethod
    def validate_region(cls, v: str) -> str:
        """Validate region names."""
        if not v or not v.strip():
            raise ValueError("region must be a non-empty string")

        import re
        if not re.match(r"^[a-z0-9-]+$", v.strip()):
            raise ValueError(
                "region must contain only lowercase letters, numbers and hyphens"
            )

        return v.strip()

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: Optional[str]) -> Optional[str]:
        """Validate the endpoint override is an HTTP/HTTPS URL."""
        if v is None or not v.strip():
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint must be a valid HTTP/HTTPS URL")
        return v.strip()

    def auth(self) -> Auth:
        """
        Build credentials from settings.

        Raises:
            ValueError: If the access key or secret is missing
        """
        if not self.access_key_id or not self.secret_access_key.get_secret_value():
            raise ValueError("SQS_ACCESS_KEY_ID and SQS_SECRET_ACCESS_KEY must be set")

        return Auth(
            access_key=self.access_key_id,
            secret_key=self.secret_access_key,
            token=self.security_token or None
        )

    def region_context(self) -> Region:
        return get_region(self.region, self.endpoint)


# Global settings instance
settings = Settings()
