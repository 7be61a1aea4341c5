"""Projection from the true value to the string a field should display."""

from .config import MaskConfig


def project(actual_value: str, config: MaskConfig, reveal_last_char: bool = False) -> str:
    """Render ``actual_value`` with every hidden position replaced by the mask glyph.

    A character stays visible when its index lies in the config's unmasked
    window, or when ``reveal_last_char`` is set and it is the final character.
    The result always has the same length as ``actual_value``.

    Examples:
        >>> project("123456789", MaskConfig(5, 4))
        '●●●●●6789'
        >>> project("pass", MaskConfig(), reveal_last_char=True)
        '●●●s'
    """
    last_index = len(actual_value) - 1
    return "".join(
        char
        if config.is_visible(index) or (reveal_last_char and index == last_index)
        else config.mask_glyph
        for index, char in enumerate(actual_value)
    )
