"""Granular overlap-add pitch shifter that keeps the signal's duration."""

from __future__ import annotations

import math
from collections.abc import Sequence

from samplecore.window import make_hann

FRAME_SIZE = 256
HOP_SIZE = 128

_MIN_RATIO = 0.25
_MAX_RATIO = 4.0


class TimePitchError(ValueError):
    """Raised when a time or pitch ratio is not a usable positive number."""


def _checked_ratio(ratio: float) -> float:
    ratio = float(ratio)
    if not math.isfinite(ratio) or ratio <= 0.001:
        raise TimePitchError(f"ratio must be a finite number above 0.001, got {ratio}")
    return max(_MIN_RATIO, min(_MAX_RATIO, ratio))


class GranularTimeWarp:
    """Pitch shifts by resampling Hann-windowed grains and overlap-adding them.

    Grains of ``FRAME_SIZE`` samples are laid down every ``HOP_SIZE`` output
    samples, and the read position also advances by ``HOP_SIZE``, so the
    duration stays constant. The read position carries over between calls
    until :meth:`reset`.
    """

    def __init__(self) -> None:
        self._sample_rate = 44100.0
        self._pitch_ratio = 1.0
        self._time_ratio = 1.0
        self._window = make_hann(FRAME_SIZE)
        self._read_pos = 0.0

    def prepare(self, sample_rate: float, max_block_size: int) -> None:
        """Set the sample rate and reset; the block size needs no storage here."""
        self._sample_rate = float(sample_rate)
        self.reset()

    @property
    def pitch_ratio(self) -> float:
        """Pitch ratio, clamped to 0.25..4; invalid values raise TimePitchError."""
        return self._pitch_ratio

    @pitch_ratio.setter
    def pitch_ratio(self, value: float) -> None:
        self._pitch_ratio = _checked_ratio(value)

    @property
    def time_ratio(self) -> float:
        """Time ratio, clamped to 0.25..4; invalid values raise TimePitchError."""
        return self._time_ratio

    @time_ratio.setter
    def time_ratio(self, value: float) -> None:
        self._time_ratio = _checked_ratio(value)

    def reset(self) -> None:
        """Move the read position back to the start."""
        self._read_pos = 0.0

    def _grain(self, samples: Sequence[float]) -> list[float]:
        last = len(samples) - 1
        step = 1.0 / self._pitch_ratio
        grain = []
        for i, weight in enumerate(self._window):
            pos = self._read_pos + i * step
            idx0 = int(pos)
            frac = max(0.0, min(1.0, pos - idx0))
            i0 = max(0, min(idx0, last))
            i1 = max(0, min(idx0 + 1, last))
            value = samples[i0] * (1.0 - frac) + samples[i1] * frac
            grain.append(value * weight)
        return grain

    def process(self, samples: Sequence[float], out_capacity: int) -> list[float]:
        """Produce up to ``out_capacity`` samples in whole hops and return them.

        Processing stops early when the input does not hold a full grain past
        the current read position.
        """
        count = len(samples)
        if count <= 0 or out_capacity <= 0:
            return []

        out = [0.0] * out_capacity
        produced = 0
        span = FRAME_SIZE / max(_MIN_RATIO, self._pitch_ratio)
        while produced + HOP_SIZE <= out_capacity:
            if self._read_pos + span >= count:
                break
            grain = self._grain(samples)
            for offset, value in enumerate(grain[: out_capacity - produced]):
                out[produced + offset] += value if math.isfinite(value) else 0.0
            produced += HOP_SIZE
            self._read_pos += HOP_SIZE
        return out[:produced]