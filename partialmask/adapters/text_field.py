"""In-memory text field and the adapter that lets the engine drive it.

``TextField`` models the small surface of a native text input that partial
masking touches: a value, a password-mask toggle, a selection and ``change``
and ``blur`` listeners. It is useful for headless hosts and for exercising the
engine exactly as a real widget would.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

from ..masking.protocols import ChangeEvent, Unsubscribe

logger = logging.getLogger(__name__)

Listener = Callable[[dict[str, Any]], None]

CHANGE = "change"
BLUR = "blur"
FOCUS = "focus"


class TextField:
    """
    A headless single-line text input.

    Assigning ``value`` fires a ``change`` event whenever the text actually
    differs, including programmatic writes; listeners receive a dict with
    ``source`` and ``value`` keys. Programmatic writes leave the caret at
    position 0, like hosts that need the cursor fix.
    """

    def __init__(self, value: str = "", password_mask: bool = False) -> None:
        self._value = value
        self.password_mask = password_mask
        self.selection: tuple[int, int] = (len(value), len(value))
        self.focused = False
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, text: str) -> None:
        self._set_value(text, caret=0)

    def add_event_listener(self, name: str, listener: Listener) -> None:
        self._listeners[name].append(listener)

    def remove_event_listener(self, name: str, listener: Listener) -> None:
        if listener in self._listeners[name]:
            self._listeners[name].remove(listener)

    def fire_event(self, name: str, **payload: Any) -> None:
        event = {"source": self, **payload}
        for listener in list(self._listeners[name]):
            listener(event)

    def set_selection(self, start: int, end: int) -> None:
        length = len(self._value)
        self.selection = (min(max(0, start), length), min(max(0, end), length))

    @property
    def cursor(self) -> int:
        return self.selection[1]

    # User interaction -------------------------------------------------

    def focus(self) -> None:
        self.focused = True
        self.fire_event(FOCUS)

    def blur(self) -> None:
        self.focused = False
        self.fire_event(BLUR)

    def type_text(self, text: str) -> None:
        """Type ``text`` one keystroke at a time at the end of the field."""
        for char in text:
            self._set_value(self._value + char, caret=len(self._value) + 1)

    def backspace(self, count: int = 1) -> None:
        """Delete ``count`` characters from the end of the field."""
        for _ in range(count):
            if not self._value:
                return
            self._set_value(self._value[:-1], caret=len(self._value) - 1)

    def clear(self) -> None:
        """Select everything and delete it in a single edit."""
        self._set_value("", caret=0)

    def _set_value(self, text: str, caret: int) -> None:
        text = "" if text is None else str(text)
        if text == self._value:
            return
        self._value = text
        self.selection = (caret, caret)
        self.fire_event(CHANGE, value=text)


class TextFieldAdapter:
    """
    Adapts a ``TextField`` to the ``InputAdapter`` protocol.

    Args:
        text_field: The field to drive
        cursor_fix: Move the caret to the end after every display write, for
            hosts that otherwise reset it to the start
    """

    def __init__(self, text_field: TextField, cursor_fix: bool = False) -> None:
        self.text_field = text_field
        self.cursor_fix = cursor_fix

    @property
    def displayed_text(self) -> str:
        return self.text_field.value

    @displayed_text.setter
    def displayed_text(self, text: str) -> None:
        self.text_field.value = text
        if self.cursor_fix:
            end = len(self.text_field.value)
            self.text_field.set_selection(end, end)

    @property
    def native_masking(self) -> bool:
        return self.text_field.password_mask

    @native_masking.setter
    def native_masking(self, enabled: bool) -> None:
        self.text_field.password_mask = enabled

    def on_change(self, callback: Callable[[ChangeEvent], None]) -> Unsubscribe:
        def listener(event: dict[str, Any]) -> None:
            callback(ChangeEvent(text=self.text_field.value))

        return self._register(CHANGE, listener)

    def on_blur(self, callback: Callable[[], None]) -> Unsubscribe:
        def listener(event: dict[str, Any]) -> None:
            callback()

        return self._register(BLUR, listener)

    def _register(self, name: str, listener: Listener) -> Unsubscribe:
        self.text_field.add_event_listener(name, listener)

        def unsubscribe() -> None:
            self.text_field.remove_event_listener(name, listener)

        return unsubscribe
