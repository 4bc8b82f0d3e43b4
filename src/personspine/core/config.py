"""PersonSpine configuration.

Application settings loaded from environment variables with PERSONSPINE_ prefix
(or a local ``.env`` file).

Example:
    >>> from personspine.core.config import get_settings
    >>> settings = get_settings(log_level="DEBUG")
    >>> settings.log_level
    'DEBUG'
    >>> settings.storage_backend
    'memory'
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with PERSONSPINE_ prefix.

    Example:
        >>> from personspine.core.config import Settings
        >>> s = Settings(database_url="sqlite:///people.db")
        >>> s.database_url
        'sqlite:///people.db'
        >>> s.dead_letter_topic
        'FIO_FAILED'
    """

    model_config = SettingsConfigDict(
        env_prefix="PERSONSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    storage_backend: Literal["memory", "sqlalchemy"] = Field(
        default="memory", description="Record store backend"
    )
    database_url: str | None = Field(default=None, description="Database connection URL")
    db_pool_size: int = Field(default=5, ge=0, description="Connection pool size (0 = NullPool)")

    # Cache
    cache_backend: Literal["memory", "redis"] = Field(default="memory", description="Cache backend")
    redis_url: str | None = Field(default=None, description="Redis connection URL")
    redis_socket_timeout: float = Field(default=2.0, gt=0.0)

    # Queue
    queue_backend: Literal["memory", "kafka"] = Field(default="memory", description="Queue backend")
    kafka_bootstrap_servers: str = Field(default="localhost:9092")
    kafka_topic: str = Field(default="FIO", description="Topic consumed for raw person records")
    kafka_partition: int = Field(default=0, ge=0)
    dead_letter_topic: str = Field(default="FIO_FAILED", description="Topic for undecodable payloads")
    dead_letter_enrichment_failures: bool = Field(
        default=False,
        description="Also dead-letter queue messages whose enrichment failed",
    )

    # Enrichment providers
    age_provider_url: str = Field(default="https://api.agify.io/")
    gender_provider_url: str = Field(default="https://api.genderize.io/")
    nationality_provider_url: str = Field(default="https://api.nationalize.io/")
    request_timeout: float = Field(default=10.0, gt=0.0, description="Provider call timeout (s)")
    provider_rate_limit: float | None = Field(
        default=None, gt=0.0, description="Max provider requests per second"
    )

    # HTTP server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(default="console", description="Log format")


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from personspine.core.config import get_settings
        >>> s = get_settings(request_timeout=2.5)
        >>> s.request_timeout
        2.5
    """
    return Settings(**overrides)
