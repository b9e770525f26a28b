"""Configuration loading for the connection cache."""

from __future__ import annotations

from functools import lru_cache
from numbers import Integral
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from alt_conncache.exceptions import ConfigurationError


class CacheSettings(BaseSettings):
    """Runtime configuration derived from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONN_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    total_capacity: int | None = Field(
        default=1,
        ge=0,
        description="Maximum cached connections across all types (None = unlimited)",
    )
    capacities: dict[str, int | None] = Field(
        default_factory=dict,
        description='Per-type limits as JSON, e.g. {"http": 2, "ftp": 1}',
    )
    debug: bool = Field(default=False, description="Log every dropped connection")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="json", description="Log format (json or console)"
    )

    @field_validator("capacities")
    @classmethod
    def reject_negative_capacities(cls, value: dict[str, int | None]) -> dict[str, int | None]:
        for conn_type, limit in value.items():
            if limit is not None and limit < 0:
                raise ValueError(f"capacity for {conn_type!r} must be >= 0")
        return value


@lru_cache(maxsize=1)
def get_settings() -> CacheSettings:
    """Return cached settings instance."""
    return CacheSettings()


def validate_capacity(field: str, value: object) -> int | None:
    """Check a capacity value passed through the programmatic API.

    ``None`` means unlimited. Anything else must be a non-negative integer.

    Raises:
        ConfigurationError: If the value is negative or not an integer.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ConfigurationError(field, value, "capacity must be an integer or None")
    if value < 0:
        raise ConfigurationError(field, value, "capacity must be non-negative")
    return int(value)
