"""partialmask: partial masking for sensitive text input.

A caller chooses a window of character positions that stay visible (for
example the last four digits of an identifier); every other position is
rendered as a mask glyph. The true value is tracked separately from what the
field displays, and each newly typed character is briefly revealed before it
is masked again.
"""

__version__ = "0.1.0"

from .adapters import TextField, TextFieldAdapter
from .core import (
    FULLY_MASKED,
    LEADING_FOUR,
    SSN_LAST_FOUR,
    AdapterError,
    ConfigurationError,
    HostPlatform,
    MaskConfig,
    PartialMaskError,
    ValidationError,
    detect_partial_mask_support,
    get_preset,
    load_field_configs,
    project,
)
from .field import PartialMaskField
from .masking import (
    AsyncioTimerService,
    ChangeEvent,
    EngineState,
    InputAdapter,
    ManualTimerService,
    MaskingEngine,
    TimerService,
)

__all__ = [
    "__version__",
    # Engine
    "MaskingEngine",
    "EngineState",
    "PartialMaskField",
    # Configuration
    "MaskConfig",
    "FULLY_MASKED",
    "SSN_LAST_FOUR",
    "LEADING_FOUR",
    "get_preset",
    "load_field_configs",
    "project",
    # Host capability
    "HostPlatform",
    "detect_partial_mask_support",
    # Collaborators
    "InputAdapter",
    "ChangeEvent",
    "TimerService",
    "ManualTimerService",
    "AsyncioTimerService",
    "TextField",
    "TextFieldAdapter",
    # Exceptions
    "PartialMaskError",
    "ValidationError",
    "ConfigurationError",
    "AdapterError",
]
