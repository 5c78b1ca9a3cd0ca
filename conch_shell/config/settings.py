"""conch-shell settings loaded from environment variables."""

from enum import StrEnum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Deployment environment."""

    DEV = "dev"
    STAGING = "staging"
    PROD = "prod"


class LogLevel(StrEnum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Settings loaded from environment variables / .env file.

    Credentials for the Conch API live here rather than on the command line.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Conch API ---
    CONCH_API_URL: str = Field(
        default="https://conch.joyent.us",
        description="Base URL of the Conch API.",
    )
    CONCH_TOKEN: str = Field(
        default="",
        description="Bearer token (JWT) used to authenticate against the API.",
    )
    CONCH_USER_AGENT: str = Field(
        default="conch-shell",
        description="User-Agent header sent with every API request.",
    )
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout for API calls and report downloads.",
    )

    # --- MBO reports ---
    REMEDIATION_MINIMUM: int = Field(
        default=90,
        description="Failures remediated faster than this many seconds are ignored.",
    )
    DEVICE_URL_TEMPLATE: str = Field(
        default="https://conch.joyent.us/#!/device/{device_id}",
        description="Link target for devices listed in the HTML reports.",
    )

    # --- Listener ---
    LISTENER_HOST: str = Field(
        default="127.0.0.1",
        description="Interface the MBO graph listener binds to.",
    )
    LISTENER_PORT: int = Field(
        default=1337,
        description="Port the MBO graph listener binds to.",
    )

    # --- Logging ---
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application log level.",
    )

    # --- Environment ---
    ENVIRONMENT: Environment = Field(
        default=Environment.DEV,
        description="Deployment environment (dev/staging/prod).",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == Environment.PROD

    def device_url(self, device_id: str) -> str:
        return self.DEVICE_URL_TEMPLATE.format(device_id=device_id)


def get_settings() -> Settings:
    """Factory function for dependency injection via FastAPI Depends."""
    return Settings()
