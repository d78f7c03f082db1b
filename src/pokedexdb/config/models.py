"""Configuration models for the Pokédex service.

This module contains all configuration-related Pydantic models used throughout the application.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool | None = None  # None = auto-detect based on environment
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "pokedexdb"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'.")
        return level


class CacheConfig(BaseModel):
    """Response cache configuration.

    TTLs follow the volatility of each surface: filtered lists churn fastest,
    aggregates and the static lineage tables the slowest.
    """

    backend: Literal["memory", "redis", "none"] = "memory"
    redis_host: str = "127.0.0.1"
    redis_port: int = 6379
    redis_db: int = 0
    memory_max_entries: int = Field(default=10_000, gt=0)
    default_ttl: int = Field(default=60, gt=0)
    list_ttl: int = Field(default=10, gt=0)
    record_ttl: int = Field(default=60, gt=0)
    top_ttl: int = Field(default=300, gt=0)
    aggregate_ttl: int = Field(default=3600, gt=0)
    lineage_ttl: int = Field(default=3600, gt=0)


class QueryConfig(BaseModel):
    """Defaults for list, top-N and import operations."""

    default_page_size: int = Field(default=24, gt=0, le=1000)
    default_top_limit: int = Field(default=10, gt=0, le=100)
    import_batch_size: int = Field(default=100, gt=0)


class PokedexConfig(BaseModel):
    """Configuration settings for the Pokédex application."""

    config_version: str = "1.0.0"

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
