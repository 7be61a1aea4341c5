"""PartialMaskField: wrap an existing text field with partial masking.

Sample usage::

    text_field = TextField()

    # Inside a running event loop; QtTimerService plays this role in a Qt app.
    timers = AsyncioTimerService()

    # PartialMaskField(text_field, 0, 4) behaves like:  'pass●●●●'
    # PartialMaskField(text_field, 2, 3) behaves like:  '●●821●●'
    # PartialMaskField(text_field)       behaves like:  '●●●●●●●●●'
    ssn_field = PartialMaskField(text_field, 5, 4, timer_service=timers)

    # Ask the wrapper for the value, never text_field.value.
    ssn = ssn_field.value()

    # Populate the field programmatically through the wrapper as well.
    ssn_field.force("123456789")
"""

from __future__ import annotations

from typing import Any

from .adapters.text_field import TextField, TextFieldAdapter
from .core.capability import HostPlatform
from .core.config import MaskConfig
from .masking.engine import MaskingEngine
from .masking.protocols import TimerService
from .observability.logging import get_logger

logger = get_logger(__name__)


class PartialMaskField:
    """
    A ``TextField`` whose characters outside a visible window are masked.

    Args:
        text_field: The field to wrap; it keeps its place in the host UI
        unmasked_start: First visible index (negative clamps to 0)
        unmasked_count: Number of visible characters (negative clamps to 0)
        supported: Whether the host supports partial masking
        timer_service: Source of the reveal-expiry timer (required)
        cursor_fix: Move the caret to the end after every display write
        config: Full ``MaskConfig``; overrides the three bounds arguments
    """

    def __init__(
        self,
        text_field: TextField,
        unmasked_start: int | None = 0,
        unmasked_count: int | None = 0,
        *,
        timer_service: TimerService,
        supported: bool = True,
        cursor_fix: bool = False,
        config: MaskConfig | None = None,
    ) -> None:
        if config is None:
            config = MaskConfig(
                unmasked_start=unmasked_start,
                unmasked_count=unmasked_count,
                supported=supported,
            )
        self.text_field = text_field
        self.adapter = TextFieldAdapter(text_field, cursor_fix=cursor_fix and config.supported)
        self.engine = MaskingEngine(self.adapter, config, timer_service)
        logger.debug(
            "Partial mask field attached",
            unmasked_start=config.unmasked_start,
            unmasked_count=config.unmasked_count,
            supported=config.supported,
        )

    @classmethod
    def for_platform(
        cls,
        text_field: TextField,
        platform: HostPlatform,
        unmasked_start: int | None = 0,
        unmasked_count: int | None = 0,
        *,
        timer_service: TimerService,
    ) -> PartialMaskField:
        """Build a field whose mode and caret handling follow a detected host."""
        return cls(
            text_field,
            unmasked_start,
            unmasked_count,
            supported=platform.supported,
            timer_service=timer_service,
            cursor_fix=platform.cursor_fix,
        )

    @property
    def config(self) -> MaskConfig:
        return self.engine.config

    def value(self) -> str:
        """The true value; the wrapped field only ever shows the masked form."""
        return self.engine.value()

    def force(self, new_value: Any) -> None:
        """Set the value programmatically and apply masking."""
        self.engine.force(new_value)

    def close(self) -> None:
        """Detach from the wrapped field and cancel any pending reveal."""
        self.engine.close()
        logger.debug("Partial mask field detached")
