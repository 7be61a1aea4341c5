"""Tests for the timer services."""

import asyncio

import pytest

from partialmask.masking import AsyncioTimerService, ManualTimerService, MaskingEngine, TimerService
from partialmask.masking.protocols import InputAdapter


class TestManualTimerService:
    """Test the virtual clock timer service."""

    def test_conforms_to_protocol(self, timers):
        assert isinstance(timers, TimerService)

    def test_fires_at_deadline(self, timers):
        fired = []
        timers.schedule_once(100, lambda: fired.append("a"))
        assert timers.advance(99) == 0
        assert fired == []
        assert timers.advance(1) == 1
        assert fired == ["a"]
        assert timers.now_ms == 100

    def test_fires_in_deadline_order(self, timers):
        fired = []
        timers.schedule_once(300, lambda: fired.append("late"))
        timers.schedule_once(100, lambda: fired.append("early"))
        timers.schedule_once(100, lambda: fired.append("early-second"))
        timers.advance(1000)
        assert fired == ["early", "early-second", "late"]

    def test_cancel_is_idempotent(self, timers):
        fired = []
        handle = timers.schedule_once(10, lambda: fired.append(True))
        timers.cancel(handle)
        timers.cancel(handle)
        timers.advance(100)
        assert fired == []
        assert timers.pending_count == 0

    def test_cancel_drops_handle_from_queue(self, timers):
        kept = timers.schedule_once(10, lambda: None)
        dropped = timers.schedule_once(5, lambda: None)
        timers.cancel(dropped)
        assert timers._queue == [kept]
        assert timers.pending_count == 1

    def test_queue_stays_bounded_while_typing(self, text_field, make_engine, timers):
        make_engine(5, 4)
        text_field.type_text("x" * 500)
        # Every keystroke replaces the previous reveal timer.
        assert len(timers._queue) == 1
        assert timers.pending_count == 1

    def test_cancel_after_fire_is_noop(self, timers):
        handle = timers.schedule_once(10, lambda: None)
        timers.advance(10)
        timers.cancel(handle)
        assert handle.fired

    def test_callback_can_schedule(self, timers):
        fired = []

        def first():
            fired.append("first")
            timers.schedule_once(50, lambda: fired.append("second"))

        timers.schedule_once(50, first)
        timers.advance(100)
        assert fired == ["first", "second"]

    def test_clock_during_callback(self, timers):
        seen = []
        timers.schedule_once(40, lambda: seen.append(timers.now_ms))
        timers.advance(100)
        assert seen == [40]
        assert timers.now_ms == 100

    def test_run_all(self, timers):
        fired = []
        timers.schedule_once(10_000, lambda: fired.append(True))
        cancelled = timers.schedule_once(5, lambda: fired.append(False))
        timers.cancel(cancelled)
        assert timers.run_all() == 1
        assert fired == [True]

    def test_negative_delay_fires_immediately(self, timers):
        fired = []
        timers.schedule_once(-5, lambda: fired.append(True))
        timers.advance(0)
        assert fired == [True]


class TestAsyncioTimerService:
    """Test the asyncio-backed timer service."""

    def test_conforms_to_protocol(self):
        assert isinstance(AsyncioTimerService(), TimerService)

    def test_fires_and_cancels(self):
        async def scenario():
            service = AsyncioTimerService()
            fired = []
            service.schedule_once(10, lambda: fired.append("kept"))
            dropped = service.schedule_once(10, lambda: fired.append("dropped"))
            service.cancel(dropped)
            await asyncio.sleep(0.05)
            service.cancel(dropped)
            return fired

        assert asyncio.run(scenario()) == ["kept"]

    def test_engine_reveal_on_event_loop(self, recording_adapter):
        assert isinstance(recording_adapter, InputAdapter)

        async def scenario():
            engine = MaskingEngine.create(
                recording_adapter,
                timer_service=AsyncioTimerService(),
                reveal_delay_ms=20,
            )
            engine.on_input_changed(1, "a")
            revealed = recording_adapter.displayed_text
            await asyncio.sleep(0.1)
            return revealed, recording_adapter.displayed_text

        assert asyncio.run(scenario()) == ("a", "●")

    def test_explicit_loop(self):
        loop = asyncio.new_event_loop()
        try:
            service = AsyncioTimerService(loop)
            fired = []
            service.schedule_once(0, lambda: fired.append(True))
            loop.run_until_complete(asyncio.sleep(0.01))
            assert fired == [True]
        finally:
            loop.close()

    def test_requires_running_loop_without_explicit_loop(self):
        with pytest.raises(RuntimeError, match="running event loop"):
            AsyncioTimerService().schedule_once(10, lambda: None)
