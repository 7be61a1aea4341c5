"""Masking state machine and the collaborator protocols it depends on."""

from .engine import EngineState, MaskingEngine
from .protocols import ChangeEvent, InputAdapter, TimerService
from .timers import AsyncioTimerService, ManualTimerService

__all__ = [
    "MaskingEngine",
    "EngineState",
    "ChangeEvent",
    "InputAdapter",
    "TimerService",
    "ManualTimerService",
    "AsyncioTimerService",
]
