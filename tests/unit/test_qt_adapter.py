"""Tests for the PySide6 adapter; skipped when the qt extra is not installed."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

QtWidgets = pytest.importorskip("PySide6.QtWidgets")
QtCore = pytest.importorskip("PySide6.QtCore")
QtGui = pytest.importorskip("PySide6.QtGui")
QtTest = pytest.importorskip("PySide6.QtTest")

from partialmask import MaskingEngine  # noqa: E402
from partialmask.adapters.qt import QLineEditAdapter, QtTimerService  # noqa: E402
from partialmask.masking.protocols import InputAdapter, TimerService  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def line_edit(qapp):
    widget = QtWidgets.QLineEdit()
    widget.show()
    yield widget
    widget.deleteLater()


@pytest.fixture
def qt_engine(line_edit, timers):
    return MaskingEngine.create(QLineEditAdapter(line_edit), 5, 4, timer_service=timers)


def send_focus_out(widget) -> None:
    event = QtGui.QFocusEvent(QtCore.QEvent.Type.FocusOut)
    QtWidgets.QApplication.sendEvent(widget, event)


class TestQLineEditAdapter:
    """Test the QLineEdit adapter against a real widget."""

    def test_conforms_to_protocol(self, line_edit):
        assert isinstance(QLineEditAdapter(line_edit), InputAdapter)

    def test_native_masking_is_echo_mode(self, line_edit):
        adapter = QLineEditAdapter(line_edit)
        adapter.native_masking = True
        assert line_edit.echoMode() == QtWidgets.QLineEdit.EchoMode.Password
        assert adapter.native_masking is True
        adapter.native_masking = False
        assert line_edit.echoMode() == QtWidgets.QLineEdit.EchoMode.Normal

    def test_engine_turns_off_password_echo(self, line_edit, qt_engine):
        assert line_edit.echoMode() == QtWidgets.QLineEdit.EchoMode.Normal

    def test_typing_is_masked(self, line_edit, qt_engine, timers):
        QtTest.QTest.keyClicks(line_edit, "123456789")
        assert qt_engine.value() == "123456789"
        assert line_edit.text() == "●●●●●6789"
        assert line_edit.cursorPosition() == 9

    def test_reveal_then_mask(self, line_edit, qt_engine, timers):
        QtTest.QTest.keyClicks(line_edit, "12")
        assert line_edit.text() == "●2"
        timers.advance(2000)
        assert line_edit.text() == "●●"

    def test_focus_out_masks(self, line_edit, qt_engine):
        QtTest.QTest.keyClicks(line_edit, "1")
        send_focus_out(line_edit)
        assert line_edit.text() == "●"

    def test_force_does_not_emit_text_edited(self, line_edit, qt_engine):
        qt_engine.force("123456789")
        assert line_edit.text() == "●●●●●6789"
        assert qt_engine.value() == "123456789"

    def test_close_disconnects(self, line_edit, qt_engine):
        qt_engine.close()
        QtTest.QTest.keyClicks(line_edit, "1")
        assert qt_engine.value() == ""


class TestQtTimerService:
    """Test single-shot QTimer scheduling."""

    def test_conforms_to_protocol(self):
        assert isinstance(QtTimerService(), TimerService)

    def test_fires_and_cancels(self, qapp):
        service = QtTimerService()
        fired = []
        kept = service.schedule_once(10, lambda: fired.append("kept"))
        dropped = service.schedule_once(10, lambda: fired.append("dropped"))
        service.cancel(dropped)
        QtTest.QTest.qWait(100)
        service.cancel(dropped)
        service.cancel(kept)
        assert fired == ["kept"]
        assert kept.fired
        assert dropped.cancelled
