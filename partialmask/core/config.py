"""Masking configuration shared by every engine instance.

``MaskConfig`` is the immutable input to the projection function. Bounds are
clamped rather than rejected so that any pair of integers (or ``None``) yields
a usable configuration.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import create_validation_error

logger = logging.getLogger(__name__)

DEFAULT_MASK_GLYPH = "●"
DEFAULT_REVEAL_DELAY_MS = 2000


def clamp_non_negative(value: Any) -> int:
    """Clamp a bound to a non-negative integer; ``None`` and negatives become 0."""
    if value is None:
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-integer mask bound {value!r}, using 0")
        return 0
    return number if number > 0 else 0


@dataclass(frozen=True)
class MaskConfig:
    """
    Which characters of a field stay visible and how the rest is masked.

    Attributes:
        unmasked_start: First visible index
        unmasked_count: Number of visible characters from unmasked_start
        supported: Whether the host can do reveal-then-mask; when False the
            engine mirrors raw input and leaves masking to the widget
        mask_glyph: Character rendered at masked positions
        reveal_delay_ms: How long a just-typed character stays visible

    Examples:
        >>> MaskConfig(unmasked_start=5, unmasked_count=4).is_visible(6)
        True
        >>> MaskConfig(unmasked_start=-3, unmasked_count=None).unmasked_start
        0
    """

    unmasked_start: int = 0
    unmasked_count: int = 0
    supported: bool = True
    mask_glyph: str = DEFAULT_MASK_GLYPH
    reveal_delay_ms: int = DEFAULT_REVEAL_DELAY_MS

    def __post_init__(self) -> None:
        object.__setattr__(self, "unmasked_start", clamp_non_negative(self.unmasked_start))
        object.__setattr__(self, "unmasked_count", clamp_non_negative(self.unmasked_count))
        object.__setattr__(self, "supported", bool(self.supported))
        self._validate_mask_glyph()
        self._validate_reveal_delay()

    def _validate_mask_glyph(self) -> None:
        if not isinstance(self.mask_glyph, str) or len(self.mask_glyph) != 1:
            raise create_validation_error(
                "mask_glyph must be a single character string",
                field_name="mask_glyph",
                expected="single character str",
                actual=self.mask_glyph,
            )

    def _validate_reveal_delay(self) -> None:
        """Fall back to the default delay for anything but a positive integer."""
        delay = self.reveal_delay_ms
        if isinstance(delay, bool) or not isinstance(delay, int) or delay <= 0:
            logger.warning(
                f"reveal_delay_ms must be positive integer, got {delay!r}, "
                f"using {DEFAULT_REVEAL_DELAY_MS}"
            )
            object.__setattr__(self, "reveal_delay_ms", DEFAULT_REVEAL_DELAY_MS)

    @property
    def unmasked_end(self) -> int:
        """Index one past the last always-visible character."""
        return self.unmasked_start + self.unmasked_count

    def is_visible(self, index: int) -> bool:
        """Whether ``index`` falls inside the always-visible window."""
        return self.unmasked_start <= index < self.unmasked_end

    @classmethod
    def from_environment(
        cls,
        unmasked_start: Optional[int] = 0,
        unmasked_count: Optional[int] = 0,
        supported: bool = True,
    ) -> "MaskConfig":
        """Build a config whose glyph and delay may be overridden by the environment.

        Environment Variables:
            PARTIALMASK_MASK_GLYPH: Single character used for masked positions
            PARTIALMASK_REVEAL_DELAY_MS: Reveal window in milliseconds (positive integer)

        Invalid values are logged and replaced by the defaults.
        """
        glyph = os.getenv("PARTIALMASK_MASK_GLYPH")
        if glyph is None or len(glyph) != 1:
            if glyph is not None:
                logger.warning(
                    f"PARTIALMASK_MASK_GLYPH must be one character, got {glyph!r}"
                )
            glyph = DEFAULT_MASK_GLYPH

        delay = DEFAULT_REVEAL_DELAY_MS
        raw_delay = os.getenv("PARTIALMASK_REVEAL_DELAY_MS")
        if raw_delay is not None:
            try:
                delay = int(raw_delay.strip())
            except ValueError:
                logger.warning(
                    f"Invalid integer value for PARTIALMASK_REVEAL_DELAY_MS: "
                    f"{raw_delay!r}, using {DEFAULT_REVEAL_DELAY_MS}"
                )

        return cls(
            unmasked_start=unmasked_start,
            unmasked_count=unmasked_count,
            supported=supported,
            mask_glyph=glyph,
            reveal_delay_ms=delay,
        )
