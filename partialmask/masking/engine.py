"""MaskingEngine: the partial-masking state machine behind a text input."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..core.config import MaskConfig
from ..core.exceptions import create_adapter_error, create_timer_service_error
from ..core.projection import project
from .protocols import (
    INPUT_ADAPTER_MEMBERS,
    TIMER_SERVICE_MEMBERS,
    ChangeEvent,
    InputAdapter,
    TimerService,
)

logger = logging.getLogger(__name__)


@dataclass
class EngineState:
    """
    Mutable state owned by exactly one ``MaskingEngine``.

    Attributes:
        actual_value: The true value of the field
        pending_reveal_timer: Handle of the outstanding reveal-expiry timer, if any
    """

    actual_value: str = ""
    pending_reveal_timer: Any = None


class MaskingEngine:
    """
    Keeps the true value of a partially masked field and decides what it shows.

    The engine reacts to three signals: the adapter reporting a change of
    the displayed text, the field losing focus, and programmatic overwrites
    through ``force``. While partial masking is supported, a newly typed
    character stays visible for ``config.reveal_delay_ms`` before it is
    masked again. When it is not supported the engine turns on the widget's
    own masking and simply mirrors whatever the widget reports.

    The timer service decides when a reveal expires and must be passed
    explicitly: ``AsyncioTimerService`` or ``QtTimerService`` in an
    application, ``ManualTimerService`` where the host drives the clock.
    All calls into one engine, including timer expiries, must be serialized
    by the host. The shipped timer services fire on the owning loop.

    Examples:
        >>> from partialmask.adapters import TextField, TextFieldAdapter
        >>> from partialmask.masking.timers import ManualTimerService
        >>> field = TextField()
        >>> timers = ManualTimerService()
        >>> engine = MaskingEngine.create(TextFieldAdapter(field), 5, 4, timer_service=timers)
        >>> engine.force("123456789")
        >>> field.value
        '●●●●●6789'
        >>> engine.value()
        '123456789'
    """

    def __init__(
        self,
        adapter: InputAdapter,
        config: MaskConfig | None,
        timer_service: TimerService,
    ) -> None:
        missing = [name for name in INPUT_ADAPTER_MEMBERS if not hasattr(adapter, name)]
        if missing:
            raise create_adapter_error(adapter, missing)
        if not all(hasattr(timer_service, name) for name in TIMER_SERVICE_MEMBERS):
            raise create_timer_service_error(timer_service)

        self.adapter = adapter
        self.config = config or MaskConfig()
        self.timer_service = timer_service
        self._state = EngineState()
        self._closed = False

        # Exactly one masking mechanism is active at any time.
        self.adapter.native_masking = not self.config.supported

        self._unsubscribers = [
            self.adapter.on_change(self._handle_change_event),
            self.adapter.on_blur(self.on_blur),
        ]

        logger.debug(
            f"MaskingEngine initialized with unmasked_start={self.config.unmasked_start}, "
            f"unmasked_count={self.config.unmasked_count}, supported={self.config.supported}"
        )

    @classmethod
    def create(
        cls,
        adapter: InputAdapter,
        unmasked_start: int | None = 0,
        unmasked_count: int | None = 0,
        supported: bool = True,
        *,
        timer_service: TimerService,
        **config_options: Any,
    ) -> MaskingEngine:
        """Build an engine from raw bounds; negative or missing bounds clamp to 0.

        Extra keyword arguments (``mask_glyph``, ``reveal_delay_ms``) are
        passed on to ``MaskConfig``.
        """
        config = MaskConfig(
            unmasked_start=unmasked_start,
            unmasked_count=unmasked_count,
            supported=supported,
            **config_options,
        )
        return cls(adapter, config, timer_service)

    @property
    def supported(self) -> bool:
        return self.config.supported

    def project(self, actual_value: str, reveal_last_char: bool = False) -> str:
        """Masked rendering of ``actual_value`` under this engine's config."""
        return project(actual_value, self.config, reveal_last_char)

    def value(self) -> str:
        """The true value of the field. Never read the widget's text instead."""
        return self._state.actual_value

    def on_input_changed(
        self, new_length: int, last_char: str = "", raw_text: str | None = None
    ) -> None:
        """Handle a change of the displayed text reported by the adapter.

        Args:
            new_length: Length of the displayed text after the change
            last_char: Last character of the displayed text
            raw_text: Full displayed text; only used when partial masking is
                unsupported, falls back to the adapter's displayed text
        """
        if self._closed:
            return

        state = self._state
        if not self.config.supported:
            state.actual_value = raw_text if raw_text is not None else self.adapter.displayed_text
            return

        current_length = len(state.actual_value)
        if new_length == current_length:
            # Transient event, e.g. provoked by our own display write.
            return

        self._cancel_reveal_timer()
        if new_length > current_length:
            state.actual_value += last_char
            self._write(reveal_last_char=True)
            state.pending_reveal_timer = self.timer_service.schedule_once(
                self.config.reveal_delay_ms, self._on_reveal_expired
            )
            logger.debug(f"Character added, value length now {len(state.actual_value)}")
        else:
            state.actual_value = state.actual_value[: max(0, new_length)]
            self._write(reveal_last_char=False)
            logger.debug(f"Characters removed, value length now {len(state.actual_value)}")

    def on_blur(self) -> None:
        """Mask everything immediately; nothing stays revealed after focus is lost."""
        if self._closed:
            return
        self._cancel_reveal_timer()
        if self.config.supported:
            self._write(reveal_last_char=False)

    def force(self, new_value: Any) -> None:
        """Overwrite the value programmatically.

        ``None`` becomes the empty string and anything else is converted with
        ``str``. A pending reveal is canceled so it cannot fire against the
        replaced value. Programmatic values are never transiently revealed.
        """
        if self._closed:
            return
        self._cancel_reveal_timer()
        self._state.actual_value = "" if new_value is None else str(new_value)
        if self.config.supported:
            self._write(reveal_last_char=False)
        else:
            self.adapter.displayed_text = self._state.actual_value
        logger.debug(f"Value forced, length {len(self._state.actual_value)}")

    def close(self) -> None:
        """Cancel any pending reveal and stop listening to the adapter."""
        if self._closed:
            return
        self._cancel_reveal_timer()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._closed = True

    def _handle_change_event(self, event: ChangeEvent) -> None:
        self.on_input_changed(event.length, event.last_char, event.text)

    def _on_reveal_expired(self) -> None:
        self._state.pending_reveal_timer = None
        self._write(reveal_last_char=False)

    def _cancel_reveal_timer(self) -> None:
        handle = self._state.pending_reveal_timer
        if handle is not None:
            self.timer_service.cancel(handle)
            self._state.pending_reveal_timer = None

    def _write(self, reveal_last_char: bool) -> None:
        self.adapter.displayed_text = self.project(self._state.actual_value, reveal_last_char)
