"""Bounded ring buffer of float samples that refuses data when full."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import islice


class RingBuffer:
    """Ring buffer with a fixed capacity; pushes stop at the free space left."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative, got {capacity}")
        self._data = [0.0] * capacity
        self._read_pos = 0
        self._write_pos = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        """Total number of samples the buffer can hold."""
        return len(self._data)

    @property
    def free_space(self) -> int:
        """Number of samples that can still be pushed."""
        return len(self._data) - self._size

    def __len__(self) -> int:
        return self._size

    def push(self, samples: Iterable[float]) -> int:
        """Push as many samples as fit; return how many were stored."""
        cap = len(self._data)
        pushed = 0
        for sample in islice(samples, self.free_space):
            self._data[self._write_pos] = float(sample)
            self._write_pos = (self._write_pos + 1) % cap
            pushed += 1
        self._size += pushed
        return pushed

    def peek(self, count: int, offset: int = 0) -> list[float]:
        """Return up to ``count`` samples from ``offset`` past the read position, unconsumed."""
        if count <= 0 or offset < 0:
            return []
        n = min(count, self._size - offset)
        if n <= 0:
            return []
        start = (self._read_pos + offset) % len(self._data)
        rotated = self._data[start:] + self._data[:start]
        return rotated[:n]

    def pop(self, count: int) -> list[float]:
        """Remove and return up to ``count`` samples."""
        taken = self.peek(count)
        self._advance(len(taken))
        return taken

    def discard(self, count: int) -> None:
        """Drop up to ``count`` samples without returning them."""
        self._advance(max(0, min(count, self._size)))

    def _advance(self, n: int) -> None:
        if n <= 0:
            return
        self._read_pos = (self._read_pos + n) % len(self._data)
        self._size -= n

    def reset(self) -> None:
        """Forget all buffered samples."""
        self._read_pos = 0
        self._write_pos = 0
        self._size = 0