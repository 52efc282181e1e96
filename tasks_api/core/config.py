"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DYNAMODB_ENDPOINT (module-level so validators can use it).
VALID_ENDPOINT_PREFIXES = ("http://", "https://")


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # DynamoDB: leave DYNAMODB_ENDPOINT unset to use the regional AWS endpoint;
    # set it (e.g. http://localhost:8000) for DynamoDB Local.
    AWS_REGION: str = "us-east-1"
    DYNAMODB_ENDPOINT: str | None = None
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: SecretStr | None = None
    DYNAMODB_CONNECT_TIMEOUT_SEC: float = 5.0
    DYNAMODB_READ_TIMEOUT_SEC: float = 10.0
    DYNAMODB_MAX_ATTEMPTS: int = 3

    # Startup table bootstrap: outer retry around the whole sequence, and the
    # per-table readiness poll after a table is created.
    BOOTSTRAP_MAX_ATTEMPTS: int = 5
    BOOTSTRAP_RETRY_DELAY_SEC: float = 3.0
    BOOTSTRAP_BACKOFF_MULTIPLIER: float = 1.0
    TABLE_READY_MAX_ATTEMPTS: int = 10
    TABLE_READY_POLL_INTERVAL_SEC: float = 2.0

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production-with-a-long-random-value")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    @field_validator("DYNAMODB_ENDPOINT")
    @classmethod
    def validate_dynamodb_endpoint(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        s = v.strip().rstrip("/")
        if not s.lower().startswith(VALID_ENDPOINT_PREFIXES):
            raise ValueError(
                "DYNAMODB_ENDPOINT must use http or https (e.g. http://localhost:8000)"
            )
        return s

    @field_validator("AWS_REGION")
    @classmethod
    def validate_aws_region(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("AWS_REGION must be set and non-empty")
        return v.strip()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(
                "LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )
        return level

    @field_validator("DYNAMODB_CONNECT_TIMEOUT_SEC", "DYNAMODB_READ_TIMEOUT_SEC")
    @classmethod
    def validate_dynamodb_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError(
                "DynamoDB timeouts must be greater than 0 and at most 120 seconds"
            )
        return v

    @field_validator("DYNAMODB_MAX_ATTEMPTS")
    @classmethod
    def validate_dynamodb_max_attempts(cls, v: int) -> int:
        if v < 1 or v > 10:
            raise ValueError("DYNAMODB_MAX_ATTEMPTS must be between 1 and 10")
        return v

    @field_validator("BOOTSTRAP_MAX_ATTEMPTS", "TABLE_READY_MAX_ATTEMPTS")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("Attempt budgets must be between 1 and 100")
        return v

    @field_validator("BOOTSTRAP_RETRY_DELAY_SEC", "TABLE_READY_POLL_INTERVAL_SEC")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0 or v > 300:
            raise ValueError("Retry delays must be between 0 and 300 seconds")
        return v

    @field_validator("BOOTSTRAP_BACKOFF_MULTIPLIER")
    @classmethod
    def validate_backoff_multiplier(cls, v: float) -> float:
        if v < 1 or v > 10:
            raise ValueError("BOOTSTRAP_BACKOFF_MULTIPLIER must be between 1 and 10")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
