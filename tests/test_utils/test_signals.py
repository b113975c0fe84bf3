from __future__ import annotations

from typing import List

import pytest

from updateresolver.utils.signals import Signal


class Listener:
    def __init__(self, log: List[str], name: str) -> None:
        self.log = log
        self.name = name

    def on_event(self, *args: object) -> None:
        self.log.append(f"{self.name}{args}")


@pytest.mark.unit
class TestSignal:
    """Tests for the Signal observer list."""

    def test_emit_calls_slots_in_connection_order(self) -> None:
        log: List[str] = []
        signal = Signal("changed")
        signal.connect(Listener(log, "a").on_event)
        signal.connect(Listener(log, "b").on_event)

        signal.emit(1, "x")

        assert log == ["a(1, 'x')", "b(1, 'x')"]

    def test_connect_is_idempotent_for_bound_methods(self) -> None:
        log: List[str] = []
        listener = Listener(log, "a")
        signal = Signal()

        signal.connect(listener.on_event)
        signal.connect(listener.on_event)
        signal.emit()

        assert len(signal) == 1
        assert log == ["a()"]

    def test_disconnect_one(self) -> None:
        log: List[str] = []
        a, b = Listener(log, "a"), Listener(log, "b")
        signal = Signal()
        signal.connect(a.on_event)
        signal.connect(b.on_event)

        signal.disconnect(a.on_event)
        signal.emit()

        assert log == ["b()"]
        assert not signal.is_connected(a.on_event)

    def test_disconnect_all(self) -> None:
        signal = Signal()
        signal.connect(print)
        signal.connect(len)

        signal.disconnect()

        assert len(signal) == 0

    def test_disconnect_unknown_slot_is_noop(self) -> None:
        signal = Signal()
        signal.connect(print)

        signal.disconnect(len)

        assert len(signal) == 1

    def test_slot_disconnected_during_emit_is_skipped(self) -> None:
        log: List[str] = []
        signal = Signal()
        late = Listener(log, "late")

        def first() -> None:
            log.append("first")
            signal.disconnect(late.on_event)

        signal.connect(first)
        signal.connect(late.on_event)
        signal.emit()

        assert log == ["first"]

    def test_slot_connected_during_emit_waits_for_next_emit(self) -> None:
        log: List[str] = []
        signal = Signal()

        def first() -> None:
            log.append("first")
            signal.connect(lambda: log.append("added"))

        signal.connect(first)
        signal.emit()
        assert log == ["first"]

        signal.emit()
        assert log == ["first", "first", "added"]

    def test_slot_exception_propagates(self) -> None:
        signal = Signal()

        def broken() -> None:
            raise ValueError("boom")

        signal.connect(broken)

        with pytest.raises(ValueError, match="boom"):
            signal.emit()

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError):
            Signal("s").connect("not callable")  # type: ignore[arg-type]

    def test_repr(self) -> None:
        signal = Signal("finished")
        signal.connect(print)

        assert repr(signal) == "Signal(name='finished', slots=1)"
