"""Shared fixtures for partialmask tests."""

import logging
from collections.abc import Callable, Generator
from typing import Any

import pytest
import structlog

from partialmask import MaskingEngine
from partialmask.adapters import TextField, TextFieldAdapter
from partialmask.masking import ManualTimerService
from partialmask.observability import set_config


class RecordingAdapter:
    """InputAdapter that records every display write and lets tests emit events."""

    def __init__(self) -> None:
        self.writes: list[str] = []
        self._displayed = ""
        self._native_masking = False
        self.change_callbacks: list[Callable[[Any], None]] = []
        self.blur_callbacks: list[Callable[[], None]] = []

    @property
    def displayed_text(self) -> str:
        return self._displayed

    @displayed_text.setter
    def displayed_text(self, text: str) -> None:
        self._displayed = text
        self.writes.append(text)

    @property
    def native_masking(self) -> bool:
        return self._native_masking

    @native_masking.setter
    def native_masking(self, enabled: bool) -> None:
        self._native_masking = enabled

    def on_change(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        self.change_callbacks.append(callback)
        return lambda: self.change_callbacks.remove(callback)

    def on_blur(self, callback: Callable[[], None]) -> Callable[[], None]:
        self.blur_callbacks.append(callback)
        return lambda: self.blur_callbacks.remove(callback)


@pytest.fixture
def timers() -> ManualTimerService:
    """Deterministic timer service driven by a virtual clock."""
    return ManualTimerService()


@pytest.fixture
def text_field() -> TextField:
    """Empty headless text field."""
    return TextField()


@pytest.fixture
def adapter(text_field: TextField) -> TextFieldAdapter:
    """Adapter around the shared text field."""
    return TextFieldAdapter(text_field)


@pytest.fixture
def recording_adapter() -> RecordingAdapter:
    """Adapter that records display writes without a widget behind it."""
    return RecordingAdapter()


@pytest.fixture
def make_engine(
    adapter: TextFieldAdapter, timers: ManualTimerService
) -> Callable[..., MaskingEngine]:
    """Factory building engines on the shared adapter and timer service."""

    def factory(start: int = 0, count: int = 0, **kwargs: Any) -> MaskingEngine:
        return MaskingEngine.create(adapter, start, count, timer_service=timers, **kwargs)

    return factory


@pytest.fixture
def ssn_engine(make_engine: Callable[..., MaskingEngine]) -> MaskingEngine:
    """Engine showing the last four digits of a nine digit number."""
    return make_engine(5, 4)


@pytest.fixture
def degraded_engine(make_engine: Callable[..., MaskingEngine]) -> MaskingEngine:
    """Engine on a host without partial masking support."""
    return make_engine(5, 4, supported=False)


@pytest.fixture(autouse=True)
def isolate_logging_state() -> Generator[None, None, None]:
    """Reset global logging configuration between tests."""
    set_config(None)
    yield
    set_config(None)
    structlog.reset_defaults()
    package_logger = logging.getLogger("partialmask")
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
