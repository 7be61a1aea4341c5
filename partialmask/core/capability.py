"""One-time host capability detection.

Some hosts move the caret to position 0 whenever a field's text is replaced
programmatically, which breaks incremental re-masking. The check is computed
once by the host and handed to the engine through ``MaskConfig.supported``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ANDROID = "android"

# First Android SDK release that keeps the caret usable after a text write.
MIN_ANDROID_SDK = (2, 1, 2)

_VERSION_PART = re.compile(r"^\d+")


def parse_sdk_version(version: str) -> tuple[int, ...] | None:
    """Parse ``"2.1.2.GA"`` style versions into ``(2, 1, 2)``.

    Returns None when the major part is not numeric. Missing trailing parts
    are allowed and yield a shorter tuple.
    """
    parts = str(version).strip().split(".")
    numbers: list[int] = []
    for part in parts[:3]:
        match = _VERSION_PART.match(part)
        if match is None:
            break
        numbers.append(int(match.group()))
    if not numbers:
        return None
    return tuple(numbers)


def detect_partial_mask_support(os_name: str, sdk_version: str) -> bool:
    """Whether partial masking works on the given host.

    Only Android builds older than 2.1.2 are unsupported. A version without a
    patch part compares on the parts it has, so ``"2.1"`` is supported.
    """
    if str(os_name).lower() != ANDROID:
        return True

    parsed = parse_sdk_version(sdk_version)
    if parsed is None:
        logger.warning(
            f"Unparseable SDK version {sdk_version!r} on {os_name}, "
            "disabling partial masking"
        )
        return False

    return parsed >= MIN_ANDROID_SDK[: len(parsed)]


def needs_cursor_fix(os_name: str) -> bool:
    """Whether the adapter must move the caret to the end after each display write."""
    return str(os_name).lower() == ANDROID


@dataclass(frozen=True)
class HostPlatform:
    """Capabilities of the host, computed once before any engine is built."""

    os_name: str
    sdk_version: str
    supported: bool
    cursor_fix: bool

    @classmethod
    def detect(cls, os_name: str, sdk_version: str) -> HostPlatform:
        supported = detect_partial_mask_support(os_name, sdk_version)
        platform = cls(
            os_name=os_name,
            sdk_version=sdk_version,
            supported=supported,
            cursor_fix=supported and needs_cursor_fix(os_name),
        )
        logger.debug(f"Detected host platform: {platform}")
        return platform
