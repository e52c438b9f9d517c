"""Pydantic configuration models for topohealth.

Uses pydantic-settings for environment variable loading
with validation and type coercion.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TopoHealthSettings(BaseSettings):
    """Main application settings.

    Settings can be provided via:
    - Environment variables (prefixed with TOPOHEALTH_)
    - .env file in project root
    - Direct instantiation
    """

    model_config = SettingsConfigDict(
        env_prefix="TOPOHEALTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Local input documents served by GET /api/topology
    snapshot_file: Path = Field(
        default=Path("data/snapshot.json"),
        description="Path to the serviceability/telemetry snapshot JSON",
    )
    isis_file: Path = Field(
        default=Path("data/isis-db.json"),
        description="Path to the IS-IS database JSON",
    )

    # Classification
    drift_threshold_pct: float = Field(
        default=10.0,
        gt=0,
        description="Drift percentage at or above which a link is DRIFT_HIGH",
    )

    # Path finding
    default_strategy: str = Field(
        default="latency",
        description="Weighting strategy used when a query does not name one",
    )

    # Upload limits
    max_snapshot_bytes: int = Field(
        default=100 * 1024 * 1024,
        ge=1,
        description="Maximum accepted snapshot upload size in bytes",
    )
    max_isis_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        description="Maximum accepted IS-IS upload size in bytes",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper

    @field_validator("default_strategy")
    @classmethod
    def validate_default_strategy(cls, v: str) -> str:
        from topohealth.graph.types import WeightingStrategy

        valid = {s.value for s in WeightingStrategy}
        if v not in valid:
            raise ValueError(f"Invalid strategy: {v}. Must be one of {sorted(valid)}")
        return v


def get_settings() -> TopoHealthSettings:
    """Get application settings."""
    return TopoHealthSettings()
