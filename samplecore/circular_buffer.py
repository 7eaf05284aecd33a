"""Fixed-size circular sample buffer that overwrites its oldest data when full."""

from __future__ import annotations

from collections.abc import Iterable


class CircularBuffer:
    """Circular buffer of float samples.

    Writing into a full buffer drops the oldest samples. A buffer of size 0
    silently ignores writes.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"buffer size must not be negative, got {size}")
        self._data = [0.0] * size
        self._write_pos = 0
        self._read_pos = 0
        self._count = 0

    @property
    def size(self) -> int:
        """Maximum number of samples the buffer holds."""
        return len(self._data)

    @property
    def available(self) -> int:
        """Number of samples waiting to be read."""
        return self._count

    def __len__(self) -> int:
        return self._count

    def write(self, samples: Iterable[float]) -> None:
        """Append samples, overwriting the oldest ones once the buffer is full."""
        size = len(self._data)
        if size == 0:
            return
        for sample in samples:
            self._data[self._write_pos] = float(sample)
            self._write_pos = (self._write_pos + 1) % size
            if self._count < size:
                self._count += 1
            else:
                self._read_pos = (self._read_pos + 1) % size

    def peek(self, count: int, offset: int = 0) -> list[float]:
        """Return up to ``count`` samples starting ``offset`` past the read position.

        Nothing is consumed. Fewer than ``count`` samples come back when fewer
        are available.
        """
        size = len(self._data)
        if size == 0 or count <= 0:
            return []
        n = min(count, self._count - offset)
        if n <= 0:
            return []
        start = (self._read_pos + offset) % size
        rotated = self._data[start:] + self._data[:start]
        return rotated[:n]

    def read(self, count: int) -> list[float]:
        """Remove and return up to ``count`` of the oldest samples."""
        taken = self.peek(count)
        if taken:
            self._read_pos = (self._read_pos + len(taken)) % len(self._data)
            self._count -= len(taken)
        return taken

    def clear(self) -> None:
        """Zero the storage and forget all buffered samples."""
        self._data = [0.0] * len(self._data)
        self._write_pos = 0
        self._read_pos = 0
        self._count = 0