"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal, TextIO

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    DATABASE_URL: str = "sqlite:///./orderflow.db"

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "orderflow API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Payments
    PAYMENT_PROVIDER: Literal["sandbox", "http"] = "sandbox"
    PAYMENT_API_URL: str | None = None
    PAYMENT_API_KEY: str | None = None
    PAYMENT_TIMEOUT_SECONDS: float = 10.0
    # sandbox only: charges above this amount are declined
    SANDBOX_DECLINE_ABOVE_CENTS: int | None = None

    # Shipment worker
    SHIPMENT_WORKER_BATCH_SIZE: int = 50
    SHIPMENT_WORKER_POLL_SECONDS: float = 30.0

    @field_validator("PAYMENT_API_URL", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str | None) -> str | None:
        """Strip trailing slash from the payment API URL."""
        return value.rstrip("/") if value else value

    @model_validator(mode="after")
    def validate_payment_provider_config(self) -> "Settings":
        """Validate payment provider configuration."""
        if self.PAYMENT_PROVIDER == "http" and not self.PAYMENT_API_URL:
            msg = "PAYMENT_API_URL is required when PAYMENT_PROVIDER is 'http'"
            raise ValueError(msg)
        if self.PAYMENT_PROVIDER == "http" and not self.PAYMENT_API_KEY:
            msg = "PAYMENT_API_KEY is required when PAYMENT_PROVIDER is 'http'"
            raise ValueError(msg)
        if self.SHIPMENT_WORKER_BATCH_SIZE < 1:
            msg = "SHIPMENT_WORKER_BATCH_SIZE must be at least 1"
            raise ValueError(msg)
        return self


def configure_logging(environment: str = "development", stream: TextIO | None = None) -> None:
    """Configure structured logging with structlog."""
    # JSON output in production, console output everywhere else
    use_json = environment == "production"

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
