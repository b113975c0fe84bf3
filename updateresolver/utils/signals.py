"""
Minimal observer lists used for checker and resolver notifications.

A :class:`Signal` holds an ordered list of callables ("slots"). Emitting
calls every connected slot synchronously, in connection order. Slots may
connect or disconnect (themselves or others) while an emission is running;
the emission walks a snapshot taken when it started, but a slot removed
mid-emission is skipped if it has not been called yet.

Example::

    >>> finished = Signal("finished")
    >>> finished.connect(lambda: print("done"))
    >>> finished.emit()
    done
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

Slot = Callable[..., Any]


class Signal:
    """An ordered, synchronous observer list.

    Args:
        name: Label used in ``repr`` and log messages.
    """

    __slots__ = ("name", "_slots")

    def __init__(self, name: str = "signal") -> None:
        self.name = name
        self._slots: List[Slot] = []

    def connect(self, slot: Slot) -> None:
        """Connect *slot*. Connecting the same slot twice is a no-op."""
        if not callable(slot):
            raise TypeError(f"{self.name}: slot must be callable, got {slot!r}")
        if not self.is_connected(slot):
            self._slots.append(slot)

    def disconnect(self, slot: Optional[Slot] = None) -> None:
        """Disconnect *slot*, or every slot when *slot* is ``None``.

        Disconnecting a slot that is not connected is a no-op.
        """
        if slot is None:
            self._slots.clear()
            return
        self._slots = [s for s in self._slots if s != slot]

    def is_connected(self, slot: Slot) -> bool:
        # Bound methods compare equal, not identical, across attribute lookups
        return any(s == slot for s in self._slots)

    def emit(self, *args: Any) -> None:
        """Call every connected slot with *args*.

        Exceptions raised by a slot propagate to the emitter; remaining
        slots are not called.
        """
        for slot in list(self._slots):
            if self.is_connected(slot):
                slot(*args)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"Signal(name={self.name!r}, slots={len(self._slots)})"
