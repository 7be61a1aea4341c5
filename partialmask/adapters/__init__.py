"""Input adapters connecting concrete widgets to the masking engine.

The PySide6 adapter lives in ``partialmask.adapters.qt`` and is imported
explicitly so the core has no GUI dependency.
"""

from .text_field import TextField, TextFieldAdapter

__all__ = ["TextField", "TextFieldAdapter"]
