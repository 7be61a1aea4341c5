"""Protocol definitions for the collaborators the masking engine talks to."""

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

Unsubscribe = Callable[[], None]


@dataclass(frozen=True)
class ChangeEvent:
    """
    Raw notification that the displayed text of a field changed.

    ``text`` is the full displayed string as the widget reports it. The engine
    only relies on its length and last character while partial masking is
    active; the full text matters in degraded mode.
    """

    text: str

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def last_char(self) -> str:
        return self.text[-1] if self.text else ""


@runtime_checkable
class InputAdapter(Protocol):
    """
    Protocol for a text input the engine can drive.

    Adapters translate the widget's own events into ``ChangeEvent`` objects
    and blur notifications, and apply the strings the engine writes back.
    Any caret repositioning after a write is the adapter's job.
    """

    @property
    def displayed_text(self) -> str: ...

    @displayed_text.setter
    def displayed_text(self, text: str) -> None: ...

    @property
    def native_masking(self) -> bool: ...

    @native_masking.setter
    def native_masking(self, enabled: bool) -> None: ...

    def on_change(self, callback: Callable[[ChangeEvent], None]) -> Unsubscribe: ...

    def on_blur(self, callback: Callable[[], None]) -> Unsubscribe: ...


@runtime_checkable
class TimerService(Protocol):
    """
    Protocol for a schedule-once, cancelable timer source.

    ``cancel`` must be idempotent: canceling a handle that already fired or
    was already canceled does nothing.
    """

    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


INPUT_ADAPTER_MEMBERS = ("displayed_text", "native_masking", "on_change", "on_blur")
TIMER_SERVICE_MEMBERS = ("schedule_once", "cancel")
