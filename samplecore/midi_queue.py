"""Bounded FIFO for MIDI events passed from a producer thread to the audio thread."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any

CAPACITY = 64


class MidiQueue:
    """Single-producer, single-consumer event queue.

    It holds at most ``CAPACITY - 1`` events, as a ring that keeps one slot
    free to tell full from empty.
    """

    def __init__(self) -> None:
        self._events: deque[Any] = deque()
        self._lock = threading.Lock()

    def push(self, event: Any) -> bool:
        """Append an event; return False without storing it if the queue is full."""
        with self._lock:
            if len(self._events) >= CAPACITY - 1:
                return False
            self._events.append(event)
            return True

    def pop(self) -> Any | None:
        """Remove and return the oldest event, or None if the queue is empty."""
        with self._lock:
            if not self._events:
                return None
            return self._events.popleft()

    def clear(self) -> None:
        """Drop all pending events."""
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)