"""Multi-channel ring buffer for planar float audio."""

from __future__ import annotations

from collections.abc import Sequence


def next_power_of_two(n: int) -> int:
    """Smallest power of two that is at least ``n`` (1 for ``n <= 0``)."""
    if n <= 0:
        return 1
    return 1 << (n - 1).bit_length()


class AudioRingBuffer:
    """Planar audio ring buffer whose capacity is rounded up to a power of two."""

    def __init__(self, channels: int, max_frames: int) -> None:
        if channels < 0:
            raise ValueError(f"channel count must not be negative, got {channels}")
        self._channels = channels
        self._capacity = next_power_of_two(max_frames)
        self._storage = [[0.0] * self._capacity for _ in range(channels)]
        self._read_pos = 0
        self._write_pos = 0
        self._available = 0

    @property
    def capacity(self) -> int:
        """Number of frames the buffer can hold."""
        return self._capacity

    @property
    def channels(self) -> int:
        """Number of channels per frame."""
        return self._channels

    @property
    def available_to_read(self) -> int:
        """Frames waiting to be read."""
        return self._available

    @property
    def available_to_write(self) -> int:
        """Frames that can still be pushed."""
        return self._capacity - self._available

    def reset(self) -> None:
        """Zero the storage and forget all buffered frames."""
        self._storage = [[0.0] * self._capacity for _ in range(self._channels)]
        self._read_pos = 0
        self._write_pos = 0
        self._available = 0

    def push(self, channels: Sequence[Sequence[float]], frames: int | None = None) -> int:
        """Push up to ``frames`` frames from planar channel data.

        ``frames`` defaults to the length of the first channel. Returns the
        number of frames stored, which is limited by the free space.
        """
        if self._channels == 0:
            return 0
        if len(channels) < self._channels:
            raise ValueError(
                f"expected {self._channels} channels of input, got {len(channels)}"
            )
        if frames is None:
            frames = len(channels[0])
        if frames <= 0:
            return 0
        n = min(frames, self.available_to_write)
        if n <= 0:
            return 0
        sources = channels[: self._channels]
        if any(len(src) < n for src in sources):
            raise ValueError(f"every channel must hold at least {n} frames")
        mask = self._capacity - 1
        for store, src in zip(self._storage, sources):
            for i, value in enumerate(src[:n]):
                store[(self._write_pos + i) & mask] = float(value)
        self._write_pos = (self._write_pos + n) & mask
        self._available += n
        return n

    def peek(self, frames: int) -> list[list[float]]:
        """Return up to ``frames`` frames per channel without consuming them."""
        if self._channels == 0 or frames <= 0:
            return []
        n = min(frames, self._available)
        start = self._read_pos
        return [(store[start:] + store[:start])[:n] for store in self._storage]

    def pop(self, frames: int) -> list[list[float]]:
        """Remove and return up to ``frames`` frames per channel."""
        taken = self.peek(frames)
        if taken:
            self._consume(len(taken[0]))
        return taken

    def discard(self, frames: int) -> None:
        """Drop up to ``frames`` frames."""
        self._consume(max(0, min(frames, self._available)))

    def _consume(self, n: int) -> None:
        self._read_pos = (self._read_pos + n) & (self._capacity - 1)
        self._available -= n