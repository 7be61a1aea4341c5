"""Configuration for partialmask logging."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format (json or text)")
    output: str = Field(default="stderr", description="Log output (stderr, stdout or file)")
    file_path: str | None = Field(default=None, description="Log file path")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Valid levels: {sorted(VALID_LEVELS)}")
        return level

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in {"json", "text"}:
            raise ValueError("format must be 'json' or 'text'")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: str) -> str:
        if v not in {"stderr", "stdout", "file"}:
            raise ValueError("output must be 'stderr', 'stdout' or 'file'")
        return v


class ObservabilityConfig(BaseModel):
    """Top-level observability configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path | str) -> ObservabilityConfig:
        """Load configuration from the ``observability`` section of a YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

        observability_data = config_data.get("observability", {})
        return cls(**observability_data)

    @classmethod
    def from_env(cls) -> ObservabilityConfig:
        """Load configuration from environment variables."""
        return cls(
            logging=LoggingConfig(
                level=os.getenv("PARTIALMASK_LOG_LEVEL", "INFO"),
                format=os.getenv("PARTIALMASK_LOG_FORMAT", "text"),
                output=os.getenv("PARTIALMASK_LOG_OUTPUT", "stderr"),
                file_path=os.getenv("PARTIALMASK_LOG_FILE"),
            )
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()


# Global configuration instance
_config: ObservabilityConfig | None = None


def get_config() -> ObservabilityConfig:
    """Get the global observability configuration."""
    global _config
    if _config is None:
        _config = ObservabilityConfig.from_env()
    return _config


def set_config(config: ObservabilityConfig | None) -> None:
    """Set (or with None, reset) the global observability configuration."""
    global _config
    _config = config
