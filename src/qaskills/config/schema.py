"""
Pydantic configuration schema for qaskills.

This module defines all configuration models with validation.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REGISTRY_URL = "https://qaskills.sh"

# =============================================================================
# Registry Configuration
# =============================================================================


class RegistryConfig(BaseModel):
    """Skill registry API configuration."""

    model_config = ConfigDict(extra="allow")

    url: str = DEFAULT_REGISTRY_URL
    timeout: float = Field(default=10.0, gt=0)


# =============================================================================
# Telemetry Configuration
# =============================================================================


class TelemetryConfig(BaseModel):
    """Anonymous install telemetry configuration."""

    enable: bool = True
    timeout: float = Field(default=3.0, gt=0)


# =============================================================================
# Validation Configuration
# =============================================================================


class ValidationConfig(BaseModel):
    """Limits used by the SKILL.md validator."""

    max_lines: int = Field(default=500, ge=1)
    max_tokens: int = Field(default=5000, ge=1)
    min_content_chars: int = Field(default=100, ge=0)


# =============================================================================
# Install Configuration
# =============================================================================


class InstallConfig(BaseModel):
    """Download and installation configuration."""

    # Scratch space for downloaded skills; defaults to <tmp>/qaskills
    work_dir: Path | None = None
    validate_before_install: bool = False


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


# =============================================================================
# Root Configuration
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for qaskills.

    Configuration can be loaded from YAML files and environment variables,
    merged in order of priority.
    """

    model_config = ConfigDict(extra="allow")

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    install: InstallConfig = Field(default_factory=InstallConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
