"""
Configuration for neo-identity stores.

The adapter needs a single connection string; the remaining settings tune the
per-operation connection the factory opens.
"""
import re
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.exceptions import DatabaseConfigurationError

SCHEMA_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


class IdentityStoreSettings(BaseSettings):
    """Settings for the identity stores, read from the environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IDENTITY_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore"
    )

    connection_string: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("IDENTITY_CONNECTION_STRING", "DATABASE_URL"),
    )
    schema_name: str = Field(default="public")
    connect_timeout: float = Field(default=10.0, gt=0)
    command_timeout: Optional[float] = Field(default=None, gt=0)
    application_name: str = Field(default="neo-identity")

    @field_validator("schema_name")
    @classmethod
    def validate_schema_name(cls, value: str) -> str:
        """Schema name is formatted into SQL, so only plain identifiers are allowed."""
        if not SCHEMA_NAME_PATTERN.match(value):
            raise ValueError(f"Invalid schema name: {value}")
        return value

    def require_connection_string(self) -> str:
        """Get the connection string or fail with a configuration error."""
        if self.connection_string is None:
            raise DatabaseConfigurationError(
                "Identity store connection string is not configured "
                "(set IDENTITY_CONNECTION_STRING or DATABASE_URL)"
            )
        value = self.connection_string.get_secret_value().strip()
        if not value:
            raise DatabaseConfigurationError("Identity store connection string is empty")
        return value


@lru_cache()
def get_settings() -> IdentityStoreSettings:
    """Get cached settings instance."""
    return IdentityStoreSettings()
