"""Ready-made mask configurations for common fields."""

from .config import MaskConfig

# Every position masked, like a plain password field: '*********'
FULLY_MASKED = MaskConfig()

# US social security number typed without separators: '●●●●●6789'
SSN_LAST_FOUR = MaskConfig(unmasked_start=5, unmasked_count=4)

# First four characters visible: 'pass●●●●'
LEADING_FOUR = MaskConfig(unmasked_start=0, unmasked_count=4)

PRESETS = {
    "fully_masked": FULLY_MASKED,
    "ssn_last_four": SSN_LAST_FOUR,
    "leading_four": LEADING_FOUR,
}


def get_preset(name: str) -> MaskConfig:
    """Look up a preset by name."""
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown mask preset '{name}'. Valid presets: {sorted(PRESETS)}"
        ) from None
