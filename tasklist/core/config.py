"""Configuration management for tasklist."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_path: str = Field(default="tasklist.db", description="SQLite database file path")

    # HTTP API Configuration
    api_prefix: str = Field(default="/api/v1", description="Prefix under which the tasks router is mounted")
    frontend_url: str = Field(default="http://localhost:3000", description="Origin allowed by CORS")

    # Token Verification Configuration
    auth_secret: str | None = Field(default=None, description="Shared secret for HS256 bearer tokens")
    auth_jwks_url: str | None = Field(default=None, description="JWKS endpoint of the identity provider (RS256)")
    auth_audience: str | None = Field(default=None, description="Expected 'aud' claim")
    auth_issuer: str | None = Field(default=None, description="Expected 'iss' claim")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")

    # Client Configuration
    api_base_url: str = Field(default="http://localhost:5000/api/v1", description="Base URL used by the API client")
    error_message_ttl_seconds: float = Field(default=5.0, description="Seconds before a client error message clears")
    success_message_ttl_seconds: float = Field(
        default=3.0, description="Seconds before a client success message clears"
    )

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value

    @property
    def has_token_verification(self) -> bool:
        """Whether a bearer token verification method is configured."""
        return bool(self.auth_secret or self.auth_jwks_url)


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Configuration
    API_TIMEOUT_SECONDS: int = 30

    # Task field bounds (after trimming)
    TITLE_MAX_LENGTH: int = 200
    DESCRIPTION_MAX_LENGTH: int = 1000

    # Identity claim placeholders for first-time user creation
    DEFAULT_USER_EMAIL: str = "unknown@example.com"
    DEFAULT_USER_NAME: str = "Unknown User"


def get_settings() -> Settings:
    """Build application settings from the environment."""
    return Settings()


constants = Constants()
