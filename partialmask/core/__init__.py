"""Configuration, projection and supporting types for partial masking."""

from .capability import HostPlatform, detect_partial_mask_support, needs_cursor_fix
from .config import DEFAULT_MASK_GLYPH, DEFAULT_REVEAL_DELAY_MS, MaskConfig
from .exceptions import (
    AdapterError,
    ConfigurationError,
    PartialMaskError,
    ValidationError,
)
from .loader import load_field_configs
from .presets import FULLY_MASKED, LEADING_FOUR, SSN_LAST_FOUR, get_preset
from .projection import project

__all__ = [
    # Configuration
    "MaskConfig",
    "DEFAULT_MASK_GLYPH",
    "DEFAULT_REVEAL_DELAY_MS",
    "load_field_configs",
    # Presets
    "FULLY_MASKED",
    "SSN_LAST_FOUR",
    "LEADING_FOUR",
    "get_preset",
    # Projection
    "project",
    # Capability detection
    "HostPlatform",
    "detect_partial_mask_support",
    "needs_cursor_fix",
    # Exceptions
    "PartialMaskError",
    "ValidationError",
    "ConfigurationError",
    "AdapterError",
]
