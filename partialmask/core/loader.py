"""Loading named field configurations from YAML files.

A field file has an optional ``defaults`` section and a ``fields`` mapping.
Each field may start from a named preset and override any ``MaskConfig``
attribute::

    defaults:
      mask_glyph: "*"
      reveal_delay_ms: 1500
    fields:
      ssn:
        preset: ssn_last_four
      account:
        unmasked_start: 0
        unmasked_count: 4
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .config import MaskConfig
from .exceptions import ConfigurationError, ValidationError
from .presets import PRESETS

logger = logging.getLogger(__name__)


class FieldSettings(BaseModel):
    """Pydantic model for one field entry (or the defaults section)."""

    model_config = ConfigDict(extra="forbid")

    preset: Optional[str] = Field(None, description="Preset to start from")
    unmasked_start: Optional[int] = Field(None, description="First visible index")
    unmasked_count: Optional[int] = Field(None, description="Number of visible characters")
    supported: Optional[bool] = Field(None, description="Host supports partial masking")
    mask_glyph: Optional[str] = Field(None, description="Glyph for masked positions")
    reveal_delay_ms: Optional[int] = Field(None, description="Reveal window in ms")

    @field_validator("preset")
    @classmethod
    def validate_preset(cls, v: Any) -> Any:
        """Validate preset name if provided."""
        if v is not None and v not in PRESETS:
            raise ValueError(
                f"Invalid preset '{v}'. Valid presets: {sorted(PRESETS)}"
            )
        return v

    def overrides(self) -> dict[str, Any]:
        """Explicitly set attributes other than the preset name."""
        return {
            key: value
            for key, value in self.model_dump(exclude={"preset"}).items()
            if value is not None
        }


class FieldFileSchema(BaseModel):
    """Pydantic model for a whole field configuration file."""

    model_config = ConfigDict(extra="forbid")

    defaults: FieldSettings = Field(default_factory=FieldSettings)
    fields: dict[str, FieldSettings] = Field(default_factory=dict)


def build_config(settings: FieldSettings, defaults: Optional[FieldSettings] = None) -> MaskConfig:
    """Resolve preset, defaults and overrides into a ``MaskConfig``.

    A preset only contributes its visible window. Precedence, lowest first:
    ``MaskConfig`` defaults, the defaults section, the field entry; within a
    section explicit attributes win over the preset.
    """
    values: dict[str, Any] = {}
    for layer in (defaults, settings):
        if layer is None:
            continue
        if layer.preset is not None:
            preset = PRESETS[layer.preset]
            values["unmasked_start"] = preset.unmasked_start
            values["unmasked_count"] = preset.unmasked_count
        values.update(layer.overrides())
    return MaskConfig(**values)


def load_field_configs(path: Union[str, Path]) -> dict[str, MaskConfig]:
    """Load every field of a YAML file into ``MaskConfig`` objects keyed by name.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the YAML or its schema is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Field configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {config_path}: {e}", config_file=str(config_path)
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Top level of {config_path} must be a mapping",
            config_file=str(config_path),
        )

    try:
        schema = FieldFileSchema(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Schema validation failed for {config_path}: {e}",
            config_file=str(config_path),
        ) from e

    configs: dict[str, MaskConfig] = {}
    for name, settings in schema.fields.items():
        try:
            configs[name] = build_config(settings, schema.defaults)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid field '{name}' in {config_path}: {e.message}",
                config_file=str(config_path),
                config_section=f"fields.{name}",
            ) from e

    logger.info(f"Loaded {len(configs)} field configurations from {config_path}")
    return configs
