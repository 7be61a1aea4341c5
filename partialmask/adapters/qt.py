"""PySide6 bindings: drive a ``QLineEdit`` and time reveals with ``QTimer``.

Requires the ``qt`` extra. ``textEdited`` is only emitted for user edits, so
the engine's own ``setText`` writes never come back as change events.
"""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QEvent, QObject, QTimer
from PySide6.QtWidgets import QLineEdit

from ..masking.protocols import ChangeEvent, Unsubscribe


class _FocusOutFilter(QObject):
    """Event filter that calls back whenever the watched widget loses focus."""

    def __init__(self, callback: Callable[[], None], parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._callback = callback

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if event.type() == QEvent.Type.FocusOut:
            self._callback()
        return False


class QLineEditAdapter:
    """Adapts a ``QLineEdit`` to the ``InputAdapter`` protocol."""

    def __init__(self, line_edit: QLineEdit) -> None:
        self.line_edit = line_edit

    @property
    def displayed_text(self) -> str:
        return self.line_edit.text()

    @displayed_text.setter
    def displayed_text(self, text: str) -> None:
        # setText() moves the caret to the end, which is where edits happen.
        self.line_edit.setText(text)

    @property
    def native_masking(self) -> bool:
        return self.line_edit.echoMode() == QLineEdit.EchoMode.Password

    @native_masking.setter
    def native_masking(self, enabled: bool) -> None:
        self.line_edit.setEchoMode(
            QLineEdit.EchoMode.Password if enabled else QLineEdit.EchoMode.Normal
        )

    def on_change(self, callback: Callable[[ChangeEvent], None]) -> Unsubscribe:
        def slot(text: str) -> None:
            callback(ChangeEvent(text=text))

        self.line_edit.textEdited.connect(slot)

        def unsubscribe() -> None:
            self.line_edit.textEdited.disconnect(slot)

        return unsubscribe

    def on_blur(self, callback: Callable[[], None]) -> Unsubscribe:
        focus_filter = _FocusOutFilter(callback, self.line_edit)
        self.line_edit.installEventFilter(focus_filter)

        def unsubscribe() -> None:
            self.line_edit.removeEventFilter(focus_filter)
            focus_filter.deleteLater()

        return unsubscribe


class QtTimerHandle:
    """Handle for one scheduled ``QTimer``; the timer is deleted once spent."""

    def __init__(self, timer: QTimer, callback: Callable[[], None]) -> None:
        self.timer = timer
        self.fired = False
        self.cancelled = False
        self._callback = callback
        timer.timeout.connect(self._fire)

    @property
    def active(self) -> bool:
        return not (self.fired or self.cancelled)

    def _fire(self) -> None:
        self.fired = True
        self.timer.deleteLater()
        self._callback()

    def cancel(self) -> None:
        if not self.active:
            return
        self.cancelled = True
        self.timer.stop()
        self.timer.deleteLater()


class QtTimerService:
    """Timer service using single-shot ``QTimer`` objects on the GUI thread.

    Timers are parented to a private ``QObject`` so their lifetime does not
    depend on Python references to the handle.
    """

    def __init__(self) -> None:
        self._owner = QObject()

    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._owner)
        timer.setSingleShot(True)
        handle = QtTimerHandle(timer, callback)
        timer.start(max(0, int(delay_ms)))
        return handle

    def cancel(self, handle: QtTimerHandle) -> None:
        handle.cancel()
