"""Client configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from mochow.exceptions import ConfigurationError


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class MochowSettings(BaseSettings):
    """Mochow service connection configuration."""

    model_config = SettingsConfigDict(env_prefix="MOCHOW_")

    account: str = Field(
        default="root",
        description="Account used to sign requests",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="API key paired with the account",
    )
    endpoint: str = Field(
        default="http://127.0.0.1:8287",
        description="Mochow service endpoint",
    )
    connection_timeout_ms: int = Field(
        default=5_000,
        description="Connection timeout in milliseconds",
    )
    request_timeout_ms: int = Field(
        default=60_000,
        description="Request timeout in milliseconds",
    )
    max_retry: int = Field(
        default=3,
        description="Maximum retries per request (negative disables retry)",
    )
    retry_base_interval_ms: int = Field(
        default=300,
        description="Base interval of the exponential retry backoff",
    )
    retry_max_delay_ms: int = Field(
        default=20_000,
        description="Upper bound of a single retry delay",
    )
    redirect_disabled: bool = Field(
        default=False,
        description="Do not follow HTTP redirects",
    )
    user_agent: str = Field(
        default="mochow-client-python",
        description="User-Agent header sent with every request",
    )

    def validate_for_client(self) -> None:
        """Check the settings before a client is built from them.

        Raises:
            ConfigurationError: If credentials, endpoint or timeouts are invalid.
        """
        api_key = self.api_key.get_secret_value() if self.api_key else ""
        if not self.account or not api_key or not self.endpoint:
            raise ConfigurationError(
                "account, api_key and endpoint are required to create a client",
                details={"endpoint": self.endpoint},
            )

        if self.connection_timeout_ms < 0 or self.request_timeout_ms < 0:
            raise ConfigurationError(
                "connection and request timeout must not be negative",
                details={
                    "connection_timeout_ms": self.connection_timeout_ms,
                    "request_timeout_ms": self.request_timeout_ms,
                },
            )

        if self.request_timeout_ms <= self.connection_timeout_ms:
            raise ConfigurationError(
                "request timeout must be greater than connection timeout",
                details={
                    "connection_timeout_ms": self.connection_timeout_ms,
                    "request_timeout_ms": self.request_timeout_ms,
                },
            )


class Settings(BaseSettings):
    """Main client settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Nested settings
    mochow: MochowSettings = Field(default_factory=MochowSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
