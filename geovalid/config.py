"""
Configuration management for geovalid.

Provides type-safe settings using Pydantic BaseSettings with
environment variable support (GEOVALID_ prefix) and .env file loading.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validity engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="GEOVALID_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Polygon ring relationship checks
    check_ring_orientation: bool = Field(
        default=True,
        description="Report interior rings winding the same way as the exterior ring",
    )
    check_ring_containment: bool = Field(
        default=True,
        description="Report interior rings outside the exterior ring or nested in another interior ring",
    )
    check_ring_intersections: bool = Field(
        default=True,
        description="Report rings of one polygon that cross or share a segment",
    )

    # Batch checking
    batch_max_workers: int = Field(
        default=4,
        ge=1,
        description="Worker threads used by check_many() (bounds concurrency, not CPU parallelism)",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
