"""
Configuration Management for Net Worth Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every tunable (where data lives, how hard storage retries, how far
projections look ahead) is visible in one place and validated at startup.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Where the portfolio is persisted."""
    FILE = "file"
    MEMORY = "memory"


class TrackerSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from NETWORTH_* environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="NETWORTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Storage
    storage_backend: StorageBackend = Field(
        default=StorageBackend.FILE,
        description="Persistence backend for the portfolio"
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding persisted portfolio documents"
    )
    storage_key: str = Field(
        default="networth_portfolio",
        min_length=1,
        description="Key under which the portfolio is stored"
    )
    storage_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for a single storage read or write"
    )
    storage_retry_max_wait: float = Field(
        default=2.0,
        ge=0.0,
        description="Upper bound in seconds between storage retries"
    )
    
    # Projections
    default_projection_months: int = Field(
        default=12,
        ge=0,
        le=600,
        description="Horizon used when no projection length is requested"
    )
    projection_periods: str = Field(
        default="3,6,12,24,36,60",
        description="Comma-separated projection horizons offered to the user"
    )
    break_even_max_months: int = Field(
        default=360,
        ge=1,
        description="Cap on the break-even search (30 years)"
    )
    
    # Display
    currency: str = Field(
        default="CAD",
        min_length=3,
        max_length=3,
        description="ISO currency code; picks the symbol used by networth.formatters"
    )
    
    @field_validator('projection_periods')
    @classmethod
    def validate_projection_periods(cls, v: str) -> str:
        """Every period must be a positive whole number of months."""
        for part in v.split(","):
            if not part.strip().isdigit() or int(part) <= 0:
                raise ValueError(f"Invalid projection period: {part!r}")
        return v
    
    @property
    def projection_periods_list(self) -> list[int]:
        """Get projection periods as a list of months."""
        return [int(part) for part in self.projection_periods.split(",")]
    
    @property
    def storage_file(self) -> Path:
        """Path of the JSON document for the configured storage key."""
        return self.data_dir / f"{self.storage_key}.json"


@lru_cache()
def get_settings() -> TrackerSettings:
    """
    Get application settings (cached).
    
    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return TrackerSettings()
